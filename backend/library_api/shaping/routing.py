"""Route resolution for link building.

The link builders only know route names and parameter values. A resolver turns
them into absolute URIs: path parameters are substituted into the route's
path, query parameters become the query string.
"""

from collections.abc import Mapping
from typing import Any, Protocol

from starlette.requests import Request
from starlette.routing import NoMatchFound

from ..core.constants import ErrorMessages
from ..core.exceptions import RouteResolutionError


class RouteResolver(Protocol):
    """Turns a route name and parameter values into an absolute URI."""

    def resolve(
        self,
        route_name: str,
        path_params: Mapping[str, Any],
        query_params: Mapping[str, Any] | None = None
    ) -> str:
        ...


class StarletteRouteResolver:
    """Resolves FastAPI route names against the application serving `request`."""

    def __init__(self, request: Request):
        self._request = request

    def resolve(
        self,
        route_name: str,
        path_params: Mapping[str, Any],
        query_params: Mapping[str, Any] | None = None
    ) -> str:
        """Build the absolute URI of `route_name`.

        Query parameters whose value is None are left out.

        Raises:
            RouteResolutionError: If the route is unknown or a path parameter is missing
        """
        try:
            url = self._request.url_for(
                route_name, **{name: str(value) for name, value in path_params.items()}
            )
        except NoMatchFound:
            raise RouteResolutionError(
                ErrorMessages.ROUTE_NOT_RESOLVED.format(
                    route_name=route_name,
                    reason=f"no route with this name taking path parameters ({', '.join(sorted(path_params))})"
                )
            ) from None

        query = {
            name: value
            for name, value in (query_params or {}).items()
            if value is not None
        }
        if query:
            url = url.include_query_params(**query)
        return str(url)

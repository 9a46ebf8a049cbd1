"""Hypermedia links.

`ResourceUriBuilder` builds parameter-preserving URIs for a collection route:
the next and previous page URIs carry every filter, sort and field selection
of the current request so following them keeps the same view of the data.

`LinkBuilder` produces link sets. Single-resource links are data driven: each
resource kind registers a table of link templates in `LinkTableRegistry` at
startup, and `links_for_resource` resolves whatever the table says.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

from ..core.constants import ErrorMessages, LinkRelations, ResourceQuery
from ..core.exceptions import ConfigurationError, RouteResolutionError
from .parameters import PagedResourceParameters, ShapingParameters
from .routing import RouteResolver


@dataclass(frozen=True)
class Link:
    """A hypermedia link."""
    href: str
    rel: str
    method: str

    def to_dict(self) -> dict[str, str]:
        return {"href": self.href, "rel": self.rel, "method": self.method}


class LinkIntent(int, Enum):
    """Which page a collection URI points at, as an offset from the current page."""
    PREVIOUS = -1
    CURRENT = 0
    NEXT = 1


class ResourceUriBuilder:
    """Builds collection URIs that preserve the request's parameters."""

    def __init__(self, resolver: RouteResolver):
        self._resolver = resolver

    def build(
        self,
        route_name: str,
        params: ShapingParameters,
        intent: LinkIntent = LinkIntent.CURRENT,
        route_values: Mapping[str, Any] | None = None
    ) -> str:
        """Build the URI of `route_name` for the page selected by `intent`.

        The resulting page number is not range-checked; callers only ask for
        NEXT / PREVIOUS when the pagination flags allow it.

        Args:
            route_name: Name of the collection route
            params: Parameters of the current request
            intent: Current, next or previous page
            route_values: Path parameters of the route (e.g. a parent id)

        Raises:
            ValueError: If paging is requested for unpaged parameters
            RouteResolutionError: If the route cannot be resolved
        """
        if isinstance(params, PagedResourceParameters):
            params = params.with_page(params.page_number + intent.value)
        elif intent is not LinkIntent.CURRENT:
            raise ValueError(f"{type(params).__name__} has no pages to navigate")

        return self._resolver.resolve(route_name, dict(route_values or {}), params.to_query_params())


@dataclass(frozen=True)
class LinkTemplate:
    """One entry of a resource kind's link table.

    Attributes:
        rel: Link relation
        method: HTTP method of the linked operation
        route_name: Route the href is resolved from
        params: Identifier names the route needs, taken from the resource's identifiers
        include_fields: Whether the client's field selection is carried along
    """
    rel: str
    method: str
    route_name: str
    params: tuple[str, ...] = ()
    include_fields: bool = False


class LinkTableRegistry:
    """Link tables keyed by resource kind, frozen after startup."""

    def __init__(self):
        self._tables: dict[str, tuple[LinkTemplate, ...]] = {}
        self._frozen = False

    def register(self, resource_kind: str, templates: Iterable[LinkTemplate]) -> None:
        if self._frozen:
            raise ConfigurationError(
                ErrorMessages.REGISTRY_FROZEN.format(registry=type(self).__name__)
            )
        if resource_kind in self._tables:
            raise ConfigurationError(f"Links for '{resource_kind}' are already registered")
        self._tables[resource_kind] = tuple(templates)

    def lookup(self, resource_kind: str) -> tuple[LinkTemplate, ...]:
        try:
            return self._tables[resource_kind]
        except KeyError:
            raise ConfigurationError(f"No links registered for '{resource_kind}'") from None

    def freeze(self) -> None:
        self._frozen = True


class LinkBuilder:
    """Builds resource and collection link sets for one request."""

    def __init__(self, link_tables: LinkTableRegistry, resolver: RouteResolver):
        self._link_tables = link_tables
        self._resolver = resolver
        self._uris = ResourceUriBuilder(resolver)

    @property
    def uris(self) -> ResourceUriBuilder:
        return self._uris

    def links_for_resource(
        self,
        resource_kind: str,
        identifiers: Mapping[str, Any],
        fields: str | None = None
    ) -> list[Link]:
        """Resolve every template registered for `resource_kind`.

        Args:
            resource_kind: Kind whose link table is used
            identifiers: Values for the templates' route parameters (e.g. author_id)
            fields: The client's field selection, carried by templates that ask for it

        Raises:
            ConfigurationError: If the kind has no link table
            RouteResolutionError: If a template needs an identifier that was not given
        """
        links = []
        for template in self._link_tables.lookup(resource_kind):
            path_params: dict[str, Any] = {}
            query_params: dict[str, Any] = {}
            for name in template.params:
                if name not in identifiers:
                    raise RouteResolutionError(
                        ErrorMessages.ROUTE_NOT_RESOLVED.format(
                            route_name=template.route_name,
                            reason=f"missing path parameter(s) {name}"
                        )
                    )
                path_params[name] = identifiers[name]
            if template.include_fields and fields:
                query_params[ResourceQuery.FIELDS] = fields

            links.append(
                Link(
                    href=self._resolver.resolve(template.route_name, path_params, query_params),
                    rel=template.rel,
                    method=template.method
                )
            )
        return links

    def links_for_collection(
        self,
        route_name: str,
        params: ShapingParameters,
        has_next: bool = False,
        has_previous: bool = False,
        route_values: Mapping[str, Any] | None = None
    ) -> list[Link]:
        """Self link, plus next/previous page links when the flags allow them."""
        links = [
            Link(
                href=self._uris.build(route_name, params, LinkIntent.CURRENT, route_values),
                rel=LinkRelations.SELF,
                method="GET"
            )
        ]
        if has_next:
            links.append(
                Link(
                    href=self._uris.build(route_name, params, LinkIntent.NEXT, route_values),
                    rel=LinkRelations.NEXT_PAGE,
                    method="GET"
                )
            )
        if has_previous:
            links.append(
                Link(
                    href=self._uris.build(route_name, params, LinkIntent.PREVIOUS, route_values),
                    rel=LinkRelations.PREVIOUS_PAGE,
                    method="GET"
                )
            )
        return links

"""Resource Shaping Service.

Per-request façade over the shaping registries: validates `fields` and
`orderBy` before anything is fetched, then maps, shapes, links and composes
the response in the representation negotiated from the Accept header.
"""

from __future__ import annotations

import json
from collections.abc import Callable, Mapping, Sequence
from typing import Any

from fastapi import Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from ..core.constants import HttpHeaders
from ..core.exceptions import InvalidFieldsError, InvalidOrderByError
from ..core.logging import get_logger
from ..core.metrics import (
    page_items_returned,
    responses_by_representation_total,
    shaping_rejections_total,
)
from ..core.tracing import get_tracer
from ..domain.transformers import MapperRegistry
from ..shaping import (
    CollectionContext,
    ComposedResponse,
    PagedResourceParameters,
    ShapedItem,
    ShapingContext,
    ShapingParameters,
    SortClause,
    StarletteRouteResolver,
    paginate,
    parse_order_by,
)

logger = get_logger(__name__)
tracer = get_tracer(__name__)

Identify = Callable[[Any], Mapping[str, Any]]


class ResourceShapingService:
    """Shapes resources for one request.

    Building the service negotiates the representation, so a request whose
    Accept header cannot be satisfied fails before any data is read.
    """

    def __init__(self, context: ShapingContext, mappers: MapperRegistry, request: Request):
        self.context = context
        self.mappers = mappers
        self.links = context.link_builder(StarletteRouteResolver(request))
        self.representation = context.composer.negotiate(request.headers.get(HttpHeaders.ACCEPT))

    def validate_fields(self, dto_type: type, fields: str | None, resource: str) -> None:
        """Reject unknown fields before fetching.

        Raises:
            InvalidFieldsError: If any requested field is unknown
        """
        try:
            self.context.projector.validate(dto_type, fields)
        except InvalidFieldsError:
            shaping_rejections_total.labels(resource=resource, reason="fields").inc()
            logger.info(
                "Rejected field selection",
                extra={'resource': resource, 'fields': fields}
            )
            raise

    def validate_collection(
        self,
        dto_type: type,
        entity_type: type,
        params: ShapingParameters,
        resource: str
    ) -> tuple[SortClause, ...]:
        """Validate fields and sorting of a collection request.

        Returns:
            Sort clauses to hand to the repository

        Raises:
            InvalidOrderByError: If the sort expression names an unknown property
            InvalidFieldsError: If a requested field is unknown
            ConfigurationError: If no property mapping exists for the type pair
        """
        mapping = self.context.property_mappings.lookup(dto_type, entity_type)
        try:
            sort_clauses = parse_order_by(params.order_by, mapping)
        except InvalidOrderByError:
            shaping_rejections_total.labels(resource=resource, reason="order_by").inc()
            logger.info(
                "Rejected sort expression",
                extra={'resource': resource, 'order_by': params.order_by}
            )
            raise

        self.validate_fields(dto_type, params.fields, resource)
        return sort_clauses

    def compose_collection(
        self,
        entities: Sequence[Any],
        dto_type: type,
        resource_kind: str,
        route_name: str,
        params: ShapingParameters,
        identify: Identify,
        total_count: int | None = None,
        route_values: Mapping[str, Any] | None = None
    ) -> ComposedResponse:
        """Map, shape and represent a collection.

        Paged parameters need `total_count`: the metadata is always derived
        from it here, never taken from the repository.
        """
        with tracer.start_as_current_span("shape_collection") as span:
            span.set_attribute("resource.kind", resource_kind)
            span.set_attribute("representation", self.representation.name)

            dtos = self.mappers.map_many(entities, dto_type)
            items = [
                ShapedItem(self.context.projector.shape(dto, params.fields), identify(dto))
                for dto in dtos
            ]

            pagination = None
            if isinstance(params, PagedResourceParameters):
                pagination = paginate(
                    total_count if total_count is not None else len(items),
                    params.page_size,
                    params.page_number
                )

            composed = self.representation.compose_collection(
                CollectionContext(
                    resource_kind=resource_kind,
                    route_name=route_name,
                    params=params,
                    items=items,
                    pagination=pagination,
                    route_values=route_values
                ),
                self.links
            )

        responses_by_representation_total.labels(
            resource=resource_kind, representation=self.representation.name
        ).inc()
        page_items_returned.labels(resource=resource_kind).observe(len(items))
        return composed

    def compose_resource(
        self,
        entity: Any,
        dto_type: type,
        resource_kind: str,
        identify: Identify,
        fields: str | None = None
    ) -> ComposedResponse:
        """Map, shape and represent a single resource."""
        dto = self.mappers.map(entity, dto_type)
        item = ShapedItem(self.context.projector.shape(dto, fields), identify(dto))
        composed = self.representation.compose_resource(item, resource_kind, fields, self.links)
        responses_by_representation_total.labels(
            resource=resource_kind, representation=self.representation.name
        ).inc()
        return composed


def to_response(
    composed: ComposedResponse,
    status_code: int = 200,
    headers: Mapping[str, str] | None = None
) -> JSONResponse:
    """Render a composed response; pagination goes to the X-Pagination header."""
    response_headers = dict(headers or {})
    if composed.pagination is not None:
        response_headers[HttpHeaders.PAGINATION] = json.dumps(composed.pagination)

    return JSONResponse(
        content=jsonable_encoder(composed.body),
        status_code=status_code,
        media_type=composed.media_type,
        headers=response_headers
    )

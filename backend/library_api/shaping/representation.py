"""Response representations selected by content negotiation.

Two strategies are registered by default:

- plain (`application/json`): the body is the list of shaped items; paging
  metadata and the next/previous page URIs travel in the pagination header.
- hypermedia (`application/vnd.marvin.hateoas+json`): every item carries its
  own links, the body wraps them as `{"value": [...], "links": [...]}`, and
  the pagination header only holds the counts.

Both publish the counts from the same `PaginationMetadata`, so they can only
differ in where navigation links appear.
"""

from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from ..core.constants import MediaTypes
from ..core.exceptions import ConfigurationError
from .field_projection import ShapedEntity
from .links import LinkBuilder, LinkIntent
from .negotiation import negotiate_media_type
from .pagination import PaginationMetadata
from .parameters import ShapingParameters


@dataclass(frozen=True)
class ShapedItem:
    """A shaped entity plus the identifiers its links are built from."""
    entity: ShapedEntity
    identifiers: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class CollectionContext:
    """Everything a strategy needs to represent one collection response."""
    resource_kind: str
    route_name: str
    params: ShapingParameters
    items: Sequence[ShapedItem]
    pagination: PaginationMetadata | None = None
    route_values: Mapping[str, Any] | None = None


@dataclass(frozen=True)
class ComposedResponse:
    """Response body plus the pagination side channel (None when unpaged)."""
    body: Any
    media_type: str
    pagination: dict[str, Any] | None = None


class RepresentationStrategy(ABC):
    """One response representation."""

    name: str
    media_type: str

    @abstractmethod
    def compose_collection(
        self,
        context: CollectionContext,
        links: LinkBuilder
    ) -> ComposedResponse:
        ...

    @abstractmethod
    def compose_resource(
        self,
        item: ShapedItem,
        resource_kind: str,
        fields: str | None,
        links: LinkBuilder
    ) -> ComposedResponse:
        ...


class PlainRepresentation(RepresentationStrategy):
    """Shaped items only; navigation lives in the pagination header."""

    name = "plain"
    media_type = MediaTypes.JSON

    def compose_collection(self, context, links):
        body = [item.entity for item in context.items]
        if context.pagination is None:
            return ComposedResponse(body=body, media_type=self.media_type)

        pagination = context.pagination
        metadata: dict[str, Any] = pagination.counts()
        metadata["previousPageLink"] = (
            links.uris.build(
                context.route_name, context.params, LinkIntent.PREVIOUS, context.route_values
            )
            if pagination.has_previous else None
        )
        metadata["nextPageLink"] = (
            links.uris.build(
                context.route_name, context.params, LinkIntent.NEXT, context.route_values
            )
            if pagination.has_next else None
        )
        return ComposedResponse(body=body, media_type=self.media_type, pagination=metadata)

    def compose_resource(self, item, resource_kind, fields, links):
        return ComposedResponse(body=item.entity, media_type=self.media_type)


class HateoasRepresentation(RepresentationStrategy):
    """Items and collection carry their links; the header only holds counts."""

    name = "hateoas"
    media_type = MediaTypes.HATEOAS_JSON

    def compose_collection(self, context, links):
        fields = context.params.fields
        value = [
            item.entity.with_links(
                links.links_for_resource(context.resource_kind, item.identifiers, fields)
            )
            for item in context.items
        ]

        pagination = context.pagination
        collection_links = links.links_for_collection(
            context.route_name,
            context.params,
            has_next=pagination.has_next if pagination else False,
            has_previous=pagination.has_previous if pagination else False,
            route_values=context.route_values
        )

        return ComposedResponse(
            body={
                "value": value,
                "links": [link.to_dict() for link in collection_links],
            },
            media_type=self.media_type,
            pagination=pagination.counts() if pagination else None
        )

    def compose_resource(self, item, resource_kind, fields, links):
        return ComposedResponse(
            body=item.entity.with_links(
                links.links_for_resource(resource_kind, item.identifiers, fields)
            ),
            media_type=self.media_type
        )


class ResponseComposer:
    """Strategy table: negotiated media type -> representation.

    Usage:
        composer = ResponseComposer()
        composer.register(PlainRepresentation())
        composer.register(HateoasRepresentation())
        strategy = composer.negotiate(request.headers.get("accept"))
    """

    def __init__(self, default_media_type: str = MediaTypes.DEFAULT):
        self._strategies: dict[str, RepresentationStrategy] = {}
        self._default_media_type = default_media_type
        self._frozen = False

    @classmethod
    def with_default_strategies(cls) -> "ResponseComposer":
        composer = cls()
        composer.register(PlainRepresentation())
        composer.register(HateoasRepresentation())
        return composer

    @property
    def media_types(self) -> list[str]:
        return list(self._strategies)

    def register(self, strategy: RepresentationStrategy) -> None:
        if self._frozen:
            raise ConfigurationError("ResponseComposer is frozen; register strategies at startup")
        media_type = strategy.media_type.lower()
        if media_type in self._strategies:
            raise ConfigurationError(f"A representation is already registered for {media_type}")
        self._strategies[media_type] = strategy

    def freeze(self) -> None:
        if self._default_media_type not in self._strategies:
            raise ConfigurationError(
                f"No representation registered for the default media type {self._default_media_type}"
            )
        self._frozen = True

    def strategy_for(self, media_type: str) -> RepresentationStrategy:
        try:
            return self._strategies[media_type.lower()]
        except KeyError:
            raise ConfigurationError(f"No representation registered for {media_type}") from None

    def negotiate(self, accept_header: str | None) -> RepresentationStrategy:
        """Strategy for the best media type in the Accept header.

        Raises:
            NotAcceptableError: If the header names only unsupported media types
        """
        media_type = negotiate_media_type(
            accept_header, self._strategies, self._default_media_type
        )
        return self.strategy_for(media_type)

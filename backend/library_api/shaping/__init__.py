"""Generic response shaping.

Field selection, validated sorting, paging metadata, hypermedia links and
content-negotiated representations for any registered resource.
"""

from .context import ShapingContext
from .field_projection import FieldProjector, ShapedEntity, split_fields
from .links import Link, LinkBuilder, LinkIntent, LinkTableRegistry, LinkTemplate, ResourceUriBuilder
from .negotiation import negotiate_media_type, parse_accept
from .order_by import SortClause, is_valid_order_by, parse_order_by
from .pagination import PagedResult, PaginationMetadata, page_offset, paginate
from .parameters import (
    AuthorsResourceParameters,
    BooksResourceParameters,
    PagedResourceParameters,
    ShapingParameters,
)
from .property_mapping import PropertyMapping, PropertyMappingRegistry, PropertyMappingValue
from .representation import (
    CollectionContext,
    ComposedResponse,
    HateoasRepresentation,
    PlainRepresentation,
    RepresentationStrategy,
    ResponseComposer,
    ShapedItem,
)
from .routing import RouteResolver, StarletteRouteResolver

__all__ = [
    "ShapingContext",
    "FieldProjector",
    "ShapedEntity",
    "split_fields",
    "Link",
    "LinkBuilder",
    "LinkIntent",
    "LinkTableRegistry",
    "LinkTemplate",
    "ResourceUriBuilder",
    "negotiate_media_type",
    "parse_accept",
    "SortClause",
    "is_valid_order_by",
    "parse_order_by",
    "PagedResult",
    "PaginationMetadata",
    "page_offset",
    "paginate",
    "AuthorsResourceParameters",
    "BooksResourceParameters",
    "PagedResourceParameters",
    "ShapingParameters",
    "PropertyMapping",
    "PropertyMappingRegistry",
    "PropertyMappingValue",
    "CollectionContext",
    "ComposedResponse",
    "HateoasRepresentation",
    "PlainRepresentation",
    "RepresentationStrategy",
    "ResponseComposer",
    "ShapedItem",
    "RouteResolver",
    "StarletteRouteResolver",
]

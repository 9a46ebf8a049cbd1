"""Process-wide shaping registries.

Built once while the application is constructed, frozen, then shared
read-only by every request.
"""

from dataclasses import dataclass, field

from .field_projection import FieldProjector
from .links import LinkBuilder, LinkTableRegistry
from .property_mapping import PropertyMappingRegistry
from .representation import ResponseComposer
from .routing import RouteResolver


@dataclass
class ShapingContext:
    property_mappings: PropertyMappingRegistry = field(default_factory=PropertyMappingRegistry)
    projector: FieldProjector = field(default_factory=FieldProjector)
    link_tables: LinkTableRegistry = field(default_factory=LinkTableRegistry)
    composer: ResponseComposer = field(default_factory=ResponseComposer.with_default_strategies)

    def freeze(self) -> "ShapingContext":
        self.property_mappings.freeze()
        self.projector.freeze()
        self.link_tables.freeze()
        self.composer.freeze()
        return self

    def link_builder(self, resolver: RouteResolver) -> LinkBuilder:
        return LinkBuilder(self.link_tables, resolver)

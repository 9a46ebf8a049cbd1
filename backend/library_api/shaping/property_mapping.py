"""Property mapping registry.

A property mapping translates the sortable property names a DTO exposes into
the source properties of the entity it is mapped from. `Name` on an author DTO
sorts by first name then last name; `Age` sorts by date of birth with the
direction reverted (older authors have earlier birth dates).

The registry is filled once while the application is built and frozen
afterwards. Lookups do not lock: nothing mutates a frozen registry.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from ..core.constants import ErrorMessages
from ..core.exceptions import ConfigurationError
from ..core.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class PropertyMappingValue:
    """One source property an exposed property sorts by."""
    source_property: str
    revert: bool = False


class PropertyMapping:
    """Case-insensitive, read-only map of exposed name -> source properties."""

    def __init__(self, mapping: Mapping[str, Iterable[PropertyMappingValue]]):
        self._values: dict[str, tuple[PropertyMappingValue, ...]] = {}
        self._names: dict[str, str] = {}
        for name, values in mapping.items():
            key = name.strip().lower()
            values = tuple(values)
            if not values:
                raise ConfigurationError(
                    f"Property '{name}' must map to at least one source property"
                )
            if key in self._values:
                raise ConfigurationError(
                    f"Property '{name}' is mapped twice (names are case-insensitive)"
                )
            self._values[key] = values
            self._names[key] = name

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.strip().lower() in self._values

    def __len__(self) -> int:
        return len(self._values)

    def get(self, name: str) -> tuple[PropertyMappingValue, ...] | None:
        return self._values.get(name.strip().lower())

    @property
    def property_names(self) -> list[str]:
        """Exposed names in registration order."""
        return list(self._names.values())


class PropertyMappingRegistry:
    """Property mappings keyed by (exposed type, source type).

    Usage:
        registry = PropertyMappingRegistry()
        registry.register(AuthorDto, Author, {"Id": [PropertyMappingValue("id")]})
        registry.freeze()
        mapping = registry.lookup(AuthorDto, Author)
    """

    def __init__(self):
        self._mappings: dict[tuple[type, type], PropertyMapping] = {}
        self._frozen = False

    @property
    def frozen(self) -> bool:
        return self._frozen

    def register(
        self,
        exposed_type: type,
        source_type: type,
        mapping: Mapping[str, Iterable[PropertyMappingValue]] | PropertyMapping
    ) -> PropertyMapping:
        """Register the mapping for a type pair.

        Raises:
            ConfigurationError: If the registry is frozen or the pair is already registered
        """
        if self._frozen:
            raise ConfigurationError(
                ErrorMessages.REGISTRY_FROZEN.format(registry=type(self).__name__)
            )

        key = (exposed_type, source_type)
        if key in self._mappings:
            raise ConfigurationError(
                ErrorMessages.MAPPING_ALREADY_REGISTERED.format(
                    kind="property mapping",
                    source=source_type.__name__,
                    destination=exposed_type.__name__
                )
            )

        if not isinstance(mapping, PropertyMapping):
            mapping = PropertyMapping(mapping)
        self._mappings[key] = mapping

        logger.debug(
            "Property mapping registered",
            extra={
                'exposed_type': exposed_type.__name__,
                'source_type': source_type.__name__,
                'properties': mapping.property_names
            }
        )
        return mapping

    def lookup(self, exposed_type: type, source_type: type) -> PropertyMapping:
        """Get the mapping for a type pair.

        Raises:
            ConfigurationError: If no mapping was registered for the pair
        """
        try:
            return self._mappings[(exposed_type, source_type)]
        except KeyError:
            logger.critical(
                "Property mapping missing",
                extra={
                    'exposed_type': exposed_type.__name__,
                    'source_type': source_type.__name__
                }
            )
            raise ConfigurationError(
                ErrorMessages.MAPPING_NOT_REGISTERED.format(
                    kind="property mapping",
                    source=source_type.__name__,
                    destination=exposed_type.__name__
                )
            ) from None

    def freeze(self) -> None:
        """End the registration phase. Further `register` calls fail."""
        self._frozen = True

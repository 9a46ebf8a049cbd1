"""Explicit object-to-object mapping.

Mapping functions are registered at startup per (source type, destination
type) pair and looked up by exact type; nothing is inferred at runtime.
"""

from collections.abc import Callable, Iterable
from typing import Any, TypeVar

from ...core.constants import ErrorMessages
from ...core.exceptions import ConfigurationError
from ...core.logging import get_logger

logger = get_logger(__name__)

D = TypeVar("D")

MappingFunction = Callable[[Any], Any]


class MapperRegistry:
    """Mapping functions keyed by (source type, destination type).

    Usage:
        mappers = MapperRegistry()
        mappers.register(Author, AuthorDto, author_to_dto)
        mappers.freeze()
        dto = mappers.map(author, AuthorDto)
    """

    def __init__(self):
        self._functions: dict[tuple[type, type], MappingFunction] = {}
        self._frozen = False

    def register(self, source_type: type, destination_type: type, function: MappingFunction) -> None:
        """Register the mapping function for a type pair.

        Raises:
            ConfigurationError: If frozen or the pair is already registered
        """
        if self._frozen:
            raise ConfigurationError(
                ErrorMessages.REGISTRY_FROZEN.format(registry=type(self).__name__)
            )
        key = (source_type, destination_type)
        if key in self._functions:
            raise ConfigurationError(
                ErrorMessages.MAPPING_ALREADY_REGISTERED.format(
                    kind="mapper",
                    source=source_type.__name__,
                    destination=destination_type.__name__
                )
            )
        self._functions[key] = function

    def freeze(self) -> None:
        self._frozen = True

    def _function_for(self, source_type: type, destination_type: type) -> MappingFunction:
        try:
            return self._functions[(source_type, destination_type)]
        except KeyError:
            logger.critical(
                "Mapper missing",
                extra={
                    'source_type': source_type.__name__,
                    'destination_type': destination_type.__name__
                }
            )
            raise ConfigurationError(
                ErrorMessages.MAPPING_NOT_REGISTERED.format(
                    kind="mapper",
                    source=source_type.__name__,
                    destination=destination_type.__name__
                )
            ) from None

    def map(self, source: Any, destination_type: type[D]) -> D:
        return self._function_for(type(source), destination_type)(source)

    def map_many(self, sources: Iterable[Any], destination_type: type[D]) -> list[D]:
        return [self.map(source, destination_type) for source in sources]

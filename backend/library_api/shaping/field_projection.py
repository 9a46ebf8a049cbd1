"""Data shaping: client-selected response fields.

Every exposed type is registered once with an accessor table (lower-cased
exposed name -> getter), built from the pydantic model's declared fields or
supplied explicitly. Shaping an object is then table lookups only, and the
values are deep-copied so a shaped entity never aliases the DTO it came from.
"""

import copy
from collections.abc import Callable, Iterable, Mapping
from operator import attrgetter, itemgetter
from typing import Any

from pydantic import BaseModel

from ..core.constants import ErrorMessages
from ..core.exceptions import ConfigurationError, InvalidFieldsError
from ..core.logging import get_logger

logger = get_logger(__name__)

LINKS_KEY = "links"

Accessor = Callable[[Any], Any]


class ShapedEntity(dict):
    """Ordered field name -> value mapping produced by `FieldProjector.shape`.

    Links are only attached in the hypermedia representation, under a
    trailing `links` key.
    """

    def with_links(self, links: Iterable[Any]) -> "ShapedEntity":
        shaped = ShapedEntity(self)
        shaped[LINKS_KEY] = [
            link.to_dict() if hasattr(link, "to_dict") else link
            for link in links
        ]
        return shaped


def split_fields(fields: str | None) -> list[str]:
    """Split a comma-separated field list, trimming and skipping empty tokens."""
    if not fields:
        return []
    return [token.strip() for token in fields.split(",") if token.strip()]


class AccessorTable:
    """Declaration-ordered accessors for one exposed type."""

    def __init__(self, accessors: Iterable[tuple[str, Accessor]]):
        self.entries: list[tuple[str, Accessor]] = []
        self.by_name: dict[str, tuple[str, Accessor]] = {}
        for exposed_name, accessor in accessors:
            key = exposed_name.lower()
            if key in self.by_name:
                raise ConfigurationError(
                    f"Field '{exposed_name}' is declared twice (names are case-insensitive)"
                )
            entry = (exposed_name, accessor)
            self.entries.append(entry)
            self.by_name[key] = entry

    @classmethod
    def for_model(cls, model: type[BaseModel]) -> "AccessorTable":
        """Accessors for every declared field of a pydantic model, exposed under its alias."""
        return cls(
            (field.serialization_alias or field.alias or name, attrgetter(name))
            for name, field in model.model_fields.items()
        )

    @classmethod
    def for_mapping(cls, source: Mapping[str, Any]) -> "AccessorTable":
        """Accessors for an already shaped mapping (links are never re-shaped)."""
        return cls((key, itemgetter(key)) for key in source if key != LINKS_KEY)


class FieldProjector:
    """Validates field lists and shapes objects of registered types.

    Usage:
        projector = FieldProjector()
        projector.register(AuthorDto)
        projector.validate(AuthorDto, "id,name")
        shaped = projector.shape(author_dto, "id,name")
    """

    def __init__(self):
        self._tables: dict[type, AccessorTable] = {}
        self._frozen = False

    def register(
        self,
        exposed_type: type,
        accessors: Mapping[str, Accessor] | None = None
    ) -> None:
        """Build the accessor table of `exposed_type`.

        Pydantic models get their table from the declared fields; other types
        must pass `accessors` explicitly, in the order fields should appear.

        Raises:
            ConfigurationError: On frozen projector, duplicate registration or
                a non-pydantic type without accessors
        """
        if self._frozen:
            raise ConfigurationError(
                ErrorMessages.REGISTRY_FROZEN.format(registry=type(self).__name__)
            )
        if exposed_type in self._tables:
            raise ConfigurationError(
                f"Fields of {exposed_type.__name__} are already registered"
            )

        if accessors is not None:
            table = AccessorTable(accessors.items())
        elif isinstance(exposed_type, type) and issubclass(exposed_type, BaseModel):
            table = AccessorTable.for_model(exposed_type)
        else:
            raise ConfigurationError(
                f"{exposed_type.__name__} is not a pydantic model; pass its accessors explicitly"
            )

        self._tables[exposed_type] = table
        logger.debug(
            "Shaped type registered",
            extra={
                'exposed_type': exposed_type.__name__,
                'fields': [name for name, _ in table.entries]
            }
        )

    def freeze(self) -> None:
        self._frozen = True

    def _table_for(self, exposed_type: type) -> AccessorTable:
        try:
            return self._tables[exposed_type]
        except KeyError:
            raise ConfigurationError(
                f"{exposed_type.__name__} is not registered for data shaping"
            ) from None

    def field_names(self, exposed_type: type) -> list[str]:
        """Exposed field names of a registered type in declaration order."""
        return [name for name, _ in self._table_for(exposed_type).entries]

    def has_properties(self, exposed_type: type, fields: str | None) -> bool:
        """True when every requested field exists on `exposed_type` (case-insensitive)."""
        table = self._table_for(exposed_type)
        for field_name in split_fields(fields):
            if field_name.lower() not in table.by_name:
                return False
        return True

    def validate(self, exposed_type: type, fields: str | None) -> None:
        """Reject the request when a requested field does not exist.

        Raises:
            InvalidFieldsError: If any requested field is unknown
        """
        if not self.has_properties(exposed_type, fields):
            raise InvalidFieldsError(ErrorMessages.INVALID_FIELDS.format(fields=fields))

    def shape(self, source: Any, fields: str | None = None) -> ShapedEntity:
        """Project `source` onto the requested fields.

        With no fields, every exposed field is included in declaration order.
        Otherwise exactly the requested fields are included in requested order,
        under their declared names.

        Args:
            source: Instance of a registered type, or a previously shaped mapping
            fields: Comma-separated field names (empty means all)

        Returns:
            A new ShapedEntity holding copies of the selected values

        Raises:
            InvalidFieldsError: If a requested field does not exist
            ConfigurationError: If the type of `source` is not registered
        """
        if isinstance(source, Mapping):
            table = AccessorTable.for_mapping(source)
        else:
            table = self._table_for(type(source))

        requested = split_fields(fields)
        if not requested:
            selected = table.entries
        else:
            selected = []
            for field_name in requested:
                entry = table.by_name.get(field_name.lower())
                if entry is None:
                    raise InvalidFieldsError(ErrorMessages.INVALID_FIELDS.format(fields=fields))
                selected.append(entry)

        return ShapedEntity(
            (exposed_name, copy.deepcopy(accessor(source)))
            for exposed_name, accessor in selected
        )

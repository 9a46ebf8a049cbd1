"""Content negotiation over the Accept header."""

from collections.abc import Iterable
from dataclasses import dataclass

from ..core.constants import ErrorMessages, MediaTypes
from ..core.exceptions import NotAcceptableError


@dataclass(frozen=True)
class MediaRange:
    media_type: str
    quality: float
    position: int

    @property
    def is_wildcard(self) -> bool:
        return self.media_type.endswith("/*")

    def matches(self, media_type: str) -> bool:
        if self.media_type == MediaTypes.ANY:
            return True
        if self.is_wildcard:
            return media_type.startswith(self.media_type[:-1])
        return media_type == self.media_type


def _parse_ranges(accept_header: str) -> list[MediaRange]:
    """Every well-formed range in header order, `q=0` ranges included."""
    ranges = []
    for position, part in enumerate(accept_header.split(",")):
        pieces = [piece.strip() for piece in part.split(";")]
        media_type = pieces[0].lower()
        if not media_type:
            continue

        quality = 1.0
        malformed = False
        for param in pieces[1:]:
            name, _, value = param.partition("=")
            if name.strip().lower() == "q":
                try:
                    quality = float(value)
                except ValueError:
                    malformed = True

        if not malformed:
            ranges.append(MediaRange(media_type, quality, position))
    return ranges


def parse_accept(accept_header: str | None) -> list[MediaRange]:
    """Parse an Accept header into acceptable media ranges, most preferred first.

    Parameters other than `q` are dropped. Ranges with `q=0` or a malformed
    quality value are left out. Equal qualities keep header order.
    """
    if not accept_header:
        return []
    ranges = [r for r in _parse_ranges(accept_header) if r.quality > 0]
    return sorted(ranges, key=lambda r: (-r.quality, r.position))


def negotiate_media_type(
    accept_header: str | None,
    supported: Iterable[str],
    default: str = MediaTypes.DEFAULT
) -> str:
    """Pick the media type to respond with.

    An absent header yields the default media type, as does a wildcard
    covering it. A concrete type sent with `q=0` is never chosen, not even
    through a wildcard.

    Raises:
        NotAcceptableError: If no acceptable range matches a supported media type
    """
    if not accept_header or not accept_header.strip():
        return default

    supported = [media_type.lower() for media_type in supported]
    excluded = {
        r.media_type
        for r in _parse_ranges(accept_header)
        if r.quality <= 0 and not r.is_wildcard
    }
    candidates = [media_type for media_type in supported if media_type not in excluded]
    if default in candidates:
        candidates.remove(default)
        candidates.insert(0, default)

    for media_range in parse_accept(accept_header):
        for media_type in candidates:
            if media_range.matches(media_type):
                return media_type

    raise NotAcceptableError(ErrorMessages.NOT_ACCEPTABLE.format(accept=accept_header))

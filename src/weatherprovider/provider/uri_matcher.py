from __future__ import annotations

from enum import IntEnum
from urllib.parse import urlsplit


class UriType(IntEnum):
    CURRENT_AND_FORECAST = 1
    CURRENT = 2
    FORECAST = 3


def _path_segments(path: str) -> tuple[str, ...]:
    return tuple(segment for segment in path.split("/") if segment)


class UriMatcher:
    """Exact-match routing table from ``authority/path`` to a selector.

    The scheme, query string and fragment of a URI are ignored; authority and
    path segments must match a registered entry exactly.
    """

    def __init__(self) -> None:
        self._routes: dict[tuple[str, tuple[str, ...]], UriType] = {}

    def add_uri(self, authority: str, path: str, uri_type: UriType) -> None:
        key = (authority.strip().lower(), _path_segments(path))
        if key in self._routes:
            raise ValueError(f"URI already registered: {authority}/{path}")
        self._routes[key] = uri_type

    def match(self, uri: str) -> UriType | None:
        parts = urlsplit(uri.strip())
        key = (parts.netloc.lower(), _path_segments(parts.path))
        return self._routes.get(key)

    def __len__(self) -> int:
        return len(self._routes)

from .base import InvalidUriError, MalformedBulkInsertError, WeatherProviderError
from .content import WeatherContentProvider, build_uri_matcher
from .cursor import MatrixCursor, RowBuilder
from .projection import (
    COLUMN_SETS,
    CYANOGENMOD_COLUMNS,
    LINEAGEOS_COLUMNS,
    ColumnSet,
    get_column_set,
    resolve_projection,
)
from .records import snapshot_from_records
from .uri_matcher import UriMatcher, UriType

__all__ = [
    "COLUMN_SETS",
    "CYANOGENMOD_COLUMNS",
    "ColumnSet",
    "InvalidUriError",
    "LINEAGEOS_COLUMNS",
    "MalformedBulkInsertError",
    "MatrixCursor",
    "RowBuilder",
    "UriMatcher",
    "UriType",
    "WeatherContentProvider",
    "WeatherProviderError",
    "build_uri_matcher",
    "get_column_set",
    "resolve_projection",
    "snapshot_from_records",
]

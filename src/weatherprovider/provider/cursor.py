from __future__ import annotations

from typing import Any, Iterator, Sequence


class RowBuilder:
    def __init__(self, indexes: dict[str, list[int]], row: list[Any]) -> None:
        self._indexes = indexes
        self._row = row

    def add(self, column: str, value: Any) -> RowBuilder:
        """Set ``column`` if it is part of the projection; ignore it otherwise."""
        for index in self._indexes.get(column, ()):
            self._row[index] = value
        return self


class MatrixCursor:
    """In-memory table shaped by a projection.

    Every row has one cell per projected column; cells that are never set
    stay ``None``. A column listed twice receives the same value in both cells.
    """

    def __init__(self, columns: Sequence[str]) -> None:
        self._columns = tuple(columns)
        self._indexes: dict[str, list[int]] = {}
        for index, name in enumerate(self._columns):
            self._indexes.setdefault(name, []).append(index)
        self._rows: list[list[Any]] = []

    @property
    def columns(self) -> tuple[str, ...]:
        return self._columns

    @property
    def count(self) -> int:
        return len(self._rows)

    def new_row(self) -> RowBuilder:
        row: list[Any] = [None] * len(self._columns)
        self._rows.append(row)
        return RowBuilder(self._indexes, row)

    def rows(self) -> list[tuple[Any, ...]]:
        return [tuple(row) for row in self._rows]

    def to_records(self) -> list[dict[str, Any]]:
        return [dict(zip(self._columns, row)) for row in self._rows]

    def __iter__(self) -> Iterator[tuple[Any, ...]]:
        return iter(self.rows())

    def __len__(self) -> int:
        return len(self._rows)

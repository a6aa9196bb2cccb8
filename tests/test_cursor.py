"""Tests for the projection-shaped result table."""

from weatherprovider.provider import MatrixCursor


class TestMatrixCursor:
    def test_unset_cells_are_none(self):
        cursor = MatrixCursor(["city", "temperature"])
        cursor.new_row().add("city", "Springfield")
        assert cursor.rows() == [("Springfield", None)]

    def test_unknown_columns_ignored(self):
        cursor = MatrixCursor(["city"])
        cursor.new_row().add("forecast_low", 3.0).add("city", "Springfield")
        assert cursor.to_records() == [{"city": "Springfield"}]

    def test_duplicate_columns_both_filled(self):
        cursor = MatrixCursor(["city", "city"])
        cursor.new_row().add("city", "Springfield")
        assert list(cursor) == [("Springfield", "Springfield")]

    def test_count(self):
        cursor = MatrixCursor([])
        cursor.new_row()
        cursor.new_row()
        assert cursor.count == 2
        assert len(cursor) == 2
        assert cursor.rows() == [(), ()]

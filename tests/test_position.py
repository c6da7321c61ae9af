"""Test Position advancement and 1-based diagnostic coordinates."""

import dataclasses

import pytest

from rasm.tokens import Position


class TestStart:
    def test_origin(self):
        assert Position.start() == Position(0, 0, 0)

    def test_one_based_view(self):
        pos = Position.start()
        assert pos.line == 1
        assert pos.col == 1


class TestAdvance:
    def test_next(self):
        assert Position(3, 1, 2).next() == Position(4, 1, 3)

    def test_next_line(self):
        assert Position(3, 1, 2).next_line() == Position(4, 2, 0)

    def test_advance_ordinary_char(self):
        assert Position(0, 0, 0).advance("a") == Position(1, 0, 1)

    def test_advance_newline(self):
        assert Position(5, 0, 5).advance("\n") == Position(6, 1, 0)

    def test_carriage_return_is_ordinary(self):
        assert Position(0, 0, 0).advance("\r") == Position(1, 0, 1)

    def test_offset_counts_consumed_chars(self):
        text = "ab\ncd\n\nxyz"
        pos = Position.start()
        for ch in text:
            pos = pos.advance(ch)
        assert pos.offset == len(text)
        assert pos.row == 3
        assert pos.column == 3

    def test_original_is_unchanged(self):
        pos = Position(0, 0, 0)
        pos.next()
        pos.next_line()
        assert pos == Position(0, 0, 0)

    def test_immutable(self):
        pos = Position(0, 0, 0)
        with pytest.raises(dataclasses.FrozenInstanceError):
            pos.row = 4  # type: ignore[misc]

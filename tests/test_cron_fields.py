"""Tests for field boundaries, name tables and field matchers."""

import pytest

from cronmatch import (
    FIELD_BOUNDARIES,
    MONTH_NAMES,
    WEEKDAY_NAMES,
    FieldBoundary,
    FieldIndex,
    FieldMatcher,
)
from cronmatch.fields import FIELD_NAMES


# =============================================================================
# FieldBoundary Tests
# =============================================================================


class TestFieldBoundaries:
    """Tests for field boundary definitions."""

    @pytest.mark.parametrize(
        "index, min_value, max_value, mod",
        [
            (FieldIndex.MINUTE, 0, 59, 1),
            (FieldIndex.HOUR, 0, 23, 1),
            (FieldIndex.DAY_OF_MONTH, 1, 31, 1),
            (FieldIndex.MONTH, 1, 12, 1),
            (FieldIndex.DAY_OF_WEEK, 0, 7, 0),
        ],
    )
    def test_boundaries(self, index, min_value, max_value, mod):
        boundary = FIELD_BOUNDARIES[index]
        assert boundary == FieldBoundary(min_value, max_value, mod)

    def test_field_order(self):
        """Test field indices follow expression order."""
        assert [int(i) for i in FieldIndex] == [0, 1, 2, 3, 4]
        assert FieldIndex.MINUTE < FieldIndex.DAY_OF_WEEK

    def test_wrap(self):
        """Test wrap modulus; day-of-week wraps at 7."""
        assert FIELD_BOUNDARIES[FieldIndex.MINUTE].wrap == 60
        assert FIELD_BOUNDARIES[FieldIndex.DAY_OF_WEEK].wrap == 7

    def test_contains(self):
        boundary = FIELD_BOUNDARIES[FieldIndex.DAY_OF_MONTH]
        assert 1 in boundary
        assert 31 in boundary
        assert 0 not in boundary
        assert 32 not in boundary

    def test_boundary_is_frozen(self):
        with pytest.raises(AttributeError):
            FIELD_BOUNDARIES[FieldIndex.HOUR].max_value = 24


# =============================================================================
# Name Table Tests
# =============================================================================


class TestNameTables:
    """Tests for month and weekday name tables."""

    def test_weekday_names(self):
        assert WEEKDAY_NAMES == {
            "sun": 0, "mon": 1, "tue": 2, "wed": 3,
            "thu": 4, "fri": 5, "sat": 6,
        }

    def test_month_names(self):
        assert list(MONTH_NAMES.values()) == list(range(1, 13))
        assert MONTH_NAMES["dec"] == 12

    def test_only_month_and_weekday_have_names(self):
        assert set(FIELD_NAMES) == {FieldIndex.MONTH, FieldIndex.DAY_OF_WEEK}


# =============================================================================
# FieldMatcher Tests
# =============================================================================


class TestFieldMatcher:
    """Tests for FieldMatcher."""

    def test_membership(self):
        matcher = FieldMatcher(FieldIndex.HOUR, {9, 17})
        assert matcher.matches(9)
        assert 17 in matcher
        assert not matcher.matches(10)

    def test_values_are_frozen(self):
        source = {1, 2}
        matcher = FieldMatcher(FieldIndex.MINUTE, source)
        source.add(3)
        assert matcher.values == frozenset({1, 2})
        assert isinstance(matcher.values, frozenset)

    def test_iteration_is_sorted(self):
        matcher = FieldMatcher(FieldIndex.MINUTE, [30, 0, 15])
        assert list(matcher) == [0, 15, 30]
        assert len(matcher) == 3

    def test_equality_and_hash(self):
        a = FieldMatcher(FieldIndex.HOUR, {1, 2})
        b = FieldMatcher(FieldIndex.HOUR, [2, 1])
        c = FieldMatcher(FieldIndex.MINUTE, {1, 2})
        assert a == b
        assert hash(a) == hash(b)
        assert a != c

    def test_repr(self):
        matcher = FieldMatcher(FieldIndex.HOUR, {17, 9})
        assert repr(matcher) == "FieldMatcher(HOUR, [9, 17])"

    def test_boundary(self):
        matcher = FieldMatcher(FieldIndex.MONTH, {1})
        assert matcher.boundary is FIELD_BOUNDARIES[FieldIndex.MONTH]

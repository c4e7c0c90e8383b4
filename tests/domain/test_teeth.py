"""Tests for the dental chart."""

import pytest

from src.domain.enums import ToothCondition
from src.domain.teeth import (
    ALL_POSITIONS,
    DECIDUOUS_POSITIONS,
    PERMANENT_POSITIONS,
    Tooth,
    chart_to_list,
    initialize_chart,
    is_deciduous,
    is_permanent,
    load_tooth,
)


class TestNumberingScheme:
    """FDI position sets."""

    def test_permanent_positions(self):
        assert len(PERMANENT_POSITIONS) == 32
        assert PERMANENT_POSITIONS[:8] == (11, 12, 13, 14, 15, 16, 17, 18)
        assert PERMANENT_POSITIONS[-1] == 48

    def test_deciduous_positions(self):
        assert len(DECIDUOUS_POSITIONS) == 20
        assert DECIDUOUS_POSITIONS[:5] == (51, 52, 53, 54, 55)
        assert DECIDUOUS_POSITIONS[-1] == 85

    def test_sets_are_disjoint(self):
        assert not set(PERMANENT_POSITIONS) & set(DECIDUOUS_POSITIONS)
        assert len(ALL_POSITIONS) == 52

    def test_classification_helpers(self):
        assert is_permanent(36) and not is_deciduous(36)
        assert is_deciduous(74) and not is_permanent(74)
        assert not is_permanent(19) and not is_deciduous(19)


class TestInitializeChart:
    """Chart initialization."""

    def test_one_empty_tooth_per_position(self):
        chart = initialize_chart()

        assert set(chart) == set(ALL_POSITIONS)
        for position, tooth in chart.items():
            assert tooth.position == position
            assert tooth.notes == []
            assert tooth.condition == ToothCondition.SOUND

    def test_teeth_are_distinct_objects(self):
        chart = initialize_chart()
        chart[11].notes.append("note")
        assert chart[21].notes == []


class TestLoadTooth:
    """Overlaying persisted entries onto a chart."""

    def test_overwrites_only_the_given_position(self):
        chart = initialize_chart()
        original_21 = chart[21]

        tooth = load_tooth(chart, {"ISO": 11, "condition": "filled", "notes": ["MOD amalgam"]})

        assert chart[11] is tooth
        assert chart[11].notes == ["MOD amalgam"]
        assert chart[11].condition == ToothCondition.FILLED
        assert chart[21] is original_21

    def test_unexpected_position_is_stored_as_given(self):
        chart = initialize_chart()
        load_tooth(chart, {"ISO": 99, "notes": ["supernumerary"]})

        assert chart[99].notes == ["supernumerary"]
        assert len(chart) == 53

    def test_missing_condition_means_sound(self):
        chart = initialize_chart()
        load_tooth(chart, {"ISO": 46, "notes": []})
        assert chart[46].condition == ToothCondition.SOUND

    def test_malformed_notes_become_empty(self):
        chart = initialize_chart()
        load_tooth(chart, {"ISO": 46, "notes": "not a list"})
        assert chart[46].notes == []


class TestTooth:
    """Tooth entity behaviour."""

    def test_position_is_read_only(self):
        tooth = Tooth(11)
        with pytest.raises(AttributeError):
            tooth.position = 12

    def test_listener_sees_notes_and_condition(self):
        calls = []
        tooth = Tooth(11)
        tooth.observe(lambda: calls.append(1))

        tooth.notes.append("Sensitive to cold")
        tooth.condition = ToothCondition.COMPROMISED
        tooth.condition = ToothCondition.COMPROMISED

        assert len(calls) == 2

    def test_to_dict(self):
        tooth = Tooth(16, notes=["Crown prep"], condition=ToothCondition.CROWN)
        assert tooth.to_dict() == {"ISO": 16, "condition": "has-crown", "notes": ["Crown prep"]}


class TestChartToList:
    """Sparse list encoding of the chart."""

    def test_list_is_indexed_by_position(self):
        encoded = chart_to_list(initialize_chart())

        assert len(encoded) == 86
        assert encoded[0] is None
        assert encoded[19] is None
        assert encoded[11] == {"ISO": 11, "condition": "sound", "notes": []}
        assert encoded[85]["ISO"] == 85
        assert sum(1 for entry in encoded if entry is not None) == 52

    def test_empty_chart(self):
        assert chart_to_list({}) == []

    def test_off_scheme_positions_follow_the_indexed_range(self):
        chart = initialize_chart()
        load_tooth(chart, {"ISO": 5_000_000, "notes": ["far"]})
        load_tooth(chart, {"ISO": -1, "notes": ["negative"]})

        encoded = chart_to_list(chart)

        assert len(encoded) == 88
        assert [entry["ISO"] for entry in encoded[86:]] == [-1, 5_000_000]

    def test_only_off_scheme_positions(self):
        encoded = chart_to_list({99: Tooth(99)})
        assert encoded == [{"ISO": 99, "condition": "sound", "notes": []}]

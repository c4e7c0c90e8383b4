"""Tests for enum string codecs and their fallbacks."""

import logging

import pytest

from src.domain.enums import (
    Gender,
    LabelCategory,
    ToothCondition,
    gender_to_string,
    label_category_to_string,
    string_to_gender,
    string_to_label_category,
    string_to_tooth_condition,
)


class TestGenderCodec:

    @pytest.mark.parametrize("value,expected", [
        ("male", Gender.MALE),
        ("Male", Gender.MALE),
        ("m", Gender.MALE),
        ("female", Gender.FEMALE),
        ("F", Gender.FEMALE),
        ("unknown", Gender.UNKNOWN),
    ])
    def test_known_values(self, value, expected):
        assert string_to_gender(value) == expected

    @pytest.mark.parametrize("value", ["robot", "", None, 42])
    def test_unknown_values_fall_back(self, value):
        assert string_to_gender(value) == Gender.UNKNOWN

    def test_fallback_is_logged(self, caplog):
        with caplog.at_level(logging.WARNING, logger="src.domain.enums"):
            string_to_gender("robot")
        assert "robot" in caplog.text

    def test_encode(self):
        assert gender_to_string(Gender.FEMALE) == "female"
        assert gender_to_string(Gender.UNKNOWN) == "unknown"


class TestLabelCategoryCodec:

    @pytest.mark.parametrize("category", [c for c in LabelCategory])
    def test_wire_values_decode_to_themselves(self, category):
        assert string_to_label_category(category.value) == category

    def test_aliases(self):
        assert string_to_label_category("secondary") == LabelCategory.GREY
        assert string_to_label_category("ERROR") == LabelCategory.DANGER

    def test_unknown_falls_back(self):
        assert string_to_label_category("sparkly") == LabelCategory.UNKNOWN
        assert label_category_to_string(LabelCategory.UNKNOWN) == "unknown"


class TestToothConditionCodec:

    def test_missing_is_sound(self):
        assert string_to_tooth_condition(None) == ToothCondition.SOUND
        assert string_to_tooth_condition("") == ToothCondition.SOUND

    def test_known_and_unknown(self):
        assert string_to_tooth_condition("endo-treated") == ToothCondition.ENDO
        assert string_to_tooth_condition("chipped") == ToothCondition.UNKNOWN

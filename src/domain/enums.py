"""Closed vocabularies used by patient records.

Each enumeration is a ``str`` Enum so members serialize to their wire string
directly. Decoding goes through the ``string_to_*`` codecs below, which never
raise: an unrecognized string maps to the designated ``UNKNOWN`` member and is
logged, so a single odd value cannot block loading a whole patient list.
"""

import logging
from enum import Enum
from typing import Optional

logger = logging.getLogger(__name__)


class Gender(str, Enum):
    """Patient gender as stored in the patient record."""
    MALE = "male"
    FEMALE = "female"
    UNKNOWN = "unknown"


class LabelCategory(str, Enum):
    """Display category of a patient label (stored as the label ``type``)."""
    PRIMARY = "primary"
    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    DANGER = "danger"
    GREY = "grey"
    UNKNOWN = "unknown"


class ToothCondition(str, Enum):
    """Recorded condition of a single tooth."""
    SOUND = "sound"
    FILLED = "filled"
    COMPROMISED = "compromised"
    ENDO = "endo-treated"
    MISSING = "missing"
    ROTTEN = "rotten"
    CROWN = "has-crown"
    UNKNOWN = "unknown"


_GENDER_ALIASES = {
    "m": Gender.MALE,
    "male": Gender.MALE,
    "f": Gender.FEMALE,
    "female": Gender.FEMALE,
}

_CATEGORY_ALIASES = {
    "default": LabelCategory.GREY,
    "secondary": LabelCategory.GREY,
    "error": LabelCategory.DANGER,
}


def string_to_gender(value: Optional[str]) -> Gender:
    """Decode a gender string.

    Accepts the wire values and single-letter abbreviations, case-insensitive.
    Anything else decodes to ``Gender.UNKNOWN``.
    """
    if isinstance(value, Gender):
        return value
    v_str = str(value or "").strip().lower()
    if v_str in _GENDER_ALIASES:
        return _GENDER_ALIASES[v_str]
    if v_str != Gender.UNKNOWN.value:
        logger.warning(f"Unrecognized gender {value!r}, decoding as '{Gender.UNKNOWN.value}'")
    return Gender.UNKNOWN


def gender_to_string(gender: Gender) -> str:
    return Gender(gender).value


def string_to_label_category(value: Optional[str]) -> LabelCategory:
    """Decode a label ``type`` string, falling back to ``LabelCategory.UNKNOWN``."""
    if isinstance(value, LabelCategory):
        return value
    v_str = str(value or "").strip().lower()
    try:
        return LabelCategory(v_str)
    except ValueError:
        pass
    if v_str in _CATEGORY_ALIASES:
        return _CATEGORY_ALIASES[v_str]
    logger.warning(
        f"Unrecognized label type {value!r}, decoding as '{LabelCategory.UNKNOWN.value}'"
    )
    return LabelCategory.UNKNOWN


def label_category_to_string(category: LabelCategory) -> str:
    return LabelCategory(category).value


def string_to_tooth_condition(value: Optional[str]) -> ToothCondition:
    """Decode a tooth condition; a missing value means the tooth is sound."""
    if isinstance(value, ToothCondition):
        return value
    if value is None or value == "":
        return ToothCondition.SOUND
    try:
        return ToothCondition(str(value).strip().lower())
    except ValueError:
        logger.warning(
            f"Unrecognized tooth condition {value!r}, decoding as '{ToothCondition.UNKNOWN.value}'"
        )
        return ToothCondition.UNKNOWN

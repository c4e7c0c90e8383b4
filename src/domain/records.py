"""Wire schemas for persisted patient records.

These Pydantic models describe the flat JSON object a persistence layer
stores for each patient. Decoding is lenient: every ``mode="before"``
validator repairs what it can (missing lists, null strings, unknown enum
strings) so that one damaged field never prevents a patient from loading.
Only a record with no usable ``_id`` is rejected.

Wire shape::

    {
      "_id": str, "name": str, "birthYear": int, "gender": str,
      "tags": str, "address": str, "email": str, "phone": str,
      "medicalHistory": [str], "gallery": [str],
      "teeth": [ToothRecord | null],    # sparse by position, then off-scheme teeth
      "labels": [{"text": str, "type": str}]
    }
"""

import logging
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

from src.domain.enums import (
    Gender,
    LabelCategory,
    ToothCondition,
    string_to_gender,
    string_to_label_category,
    string_to_tooth_condition,
)

logger = logging.getLogger(__name__)


def _string_list(v: Any) -> list[str]:
    if not isinstance(v, list):
        return []
    return [item if isinstance(item, str) else str(item) for item in v if item is not None]


def _tooth_position(v: Any) -> Optional[int]:
    """Whole-number position from an int, integral float or numeric string."""
    if isinstance(v, bool):
        return None
    if isinstance(v, int):
        return v
    if isinstance(v, float):
        return int(v) if v.is_integer() else None
    if isinstance(v, str):
        try:
            return int(v.strip())
        except ValueError:
            return None
    return None


class Label(BaseModel):
    """Patient label: display text plus a category (wire name ``type``)."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    text: str = ""
    category: LabelCategory = Field(LabelCategory.UNKNOWN, alias="type")

    @field_validator("text", mode="before")
    @classmethod
    def coerce_text(cls, v) -> str:
        return "" if v is None else str(v)

    @field_validator("category", mode="before")
    @classmethod
    def decode_category(cls, v) -> LabelCategory:
        return string_to_label_category(v)

    @field_serializer("category")
    def encode_category(self, category: LabelCategory) -> str:
        return category.value


class ToothRecord(BaseModel):
    """Persisted form of one chart entry."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    position: int = Field(..., alias="ISO")
    condition: ToothCondition = ToothCondition.SOUND
    notes: list[str] = Field(default_factory=list)

    @field_validator("condition", mode="before")
    @classmethod
    def decode_condition(cls, v) -> ToothCondition:
        return string_to_tooth_condition(v)

    @field_validator("notes", mode="before")
    @classmethod
    def coerce_notes(cls, v) -> list[str]:
        return _string_list(v)

    @field_serializer("condition")
    def encode_condition(self, condition: ToothCondition) -> str:
        return condition.value


class PatientRecord(BaseModel):
    """Persisted form of a patient.

    Parameters:
        id: Patient identifier (wire ``_id``), required
        name: Full name
        birth_year: Year of birth (wire ``birthYear``); unparseable values become 0
        gender: Gender; unknown strings decode to ``Gender.UNKNOWN``
        tags: Free-text tags
        address: Postal address
        email: Email address
        phone: Phone number
        medical_history: Free-text history entries; non-list input becomes []
        gallery: Image references; missing input becomes []
        teeth: Sparse chart list, ``None`` where a position has no data
        labels: Ordered labels
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str = Field(..., alias="_id")
    name: str = ""
    birth_year: int = Field(0, alias="birthYear")
    gender: Gender = Gender.MALE
    tags: str = ""
    address: str = ""
    email: str = ""
    phone: str = ""
    medical_history: list[str] = Field(default_factory=list, alias="medicalHistory")
    gallery: list[str] = Field(default_factory=list)
    teeth: list[Optional[ToothRecord]] = Field(default_factory=list)
    labels: list[Label] = Field(default_factory=list)

    @field_validator("id", mode="before")
    @classmethod
    def validate_id(cls, v) -> str:
        if v is None or (isinstance(v, str) and not v.strip()):
            raise ValueError("Patient record must carry a non-empty _id")
        return str(v)

    @field_validator("name", "tags", "address", "email", "phone", mode="before")
    @classmethod
    def coerce_text(cls, v) -> str:
        return "" if v is None else str(v)

    @field_validator("birth_year", mode="before")
    @classmethod
    def coerce_birth_year(cls, v) -> int:
        if v is None or v == "":
            return 0
        try:
            return int(float(v))
        except (TypeError, ValueError):
            logger.warning(f"Unparseable birthYear {v!r}, decoding as 0")
            return 0

    @field_validator("gender", mode="before")
    @classmethod
    def decode_gender(cls, v) -> Gender:
        return string_to_gender(v)

    @field_validator("medical_history", "gallery", mode="before")
    @classmethod
    def coerce_string_list(cls, v) -> list[str]:
        return _string_list(v)

    @field_validator("teeth", mode="before")
    @classmethod
    def coerce_teeth(cls, v) -> list:
        if isinstance(v, dict):
            v = list(v.values())
        if not isinstance(v, list):
            return []
        teeth = []
        for entry in v:
            if isinstance(entry, ToothRecord):
                teeth.append(entry)
            elif isinstance(entry, dict) and entry.get("ISO") is not None:
                position = _tooth_position(entry["ISO"])
                if position is None:
                    logger.warning(f"Unusable tooth position {entry['ISO']!r}, skipping chart entry")
                    teeth.append(None)
                else:
                    teeth.append({**entry, "ISO": position})
            else:
                teeth.append(None)
        return teeth

    @field_validator("labels", mode="before")
    @classmethod
    def coerce_labels(cls, v) -> list:
        if not isinstance(v, list):
            return []
        return [label for label in v if isinstance(label, (dict, Label))]

    @field_serializer("gender")
    def encode_gender(self, gender: Gender) -> str:
        return gender.value

    def to_wire(self) -> dict[str, Any]:
        """Dump with wire field names."""
        return self.model_dump(by_alias=True)

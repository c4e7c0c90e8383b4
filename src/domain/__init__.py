"""Domain layer for Dental-Records.

This module contains the patient aggregate, its dental chart, the derivation
rules over the appointment ledger and the persisted record schemas.
All domain models are pure Python with no external dependencies beyond Pydantic.
"""

from .appointments import Appointment, Treatment
from .enums import Gender, LabelCategory, ToothCondition
from .patient import Patient
from .records import Label, PatientRecord, ToothRecord
from .teeth import Tooth

__all__ = [
    "Appointment",
    "Treatment",
    "Gender",
    "LabelCategory",
    "ToothCondition",
    "Patient",
    "Label",
    "PatientRecord",
    "ToothRecord",
    "Tooth",
]

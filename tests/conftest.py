"""Shared fixtures for the dental records test suite."""

import pytest

from src.adapters.appointment_ledger import InMemoryAppointmentLedger
from src.domain.context import RecordContext
from src.infrastructure.formatting import format_date

from factories import TODAY


@pytest.fixture
def ledger() -> InMemoryAppointmentLedger:
    return InMemoryAppointmentLedger()


@pytest.fixture
def context(ledger) -> RecordContext:
    return RecordContext(
        appointments=ledger,
        today=lambda: TODAY,
        format_date=format_date,
        get_setting=lambda key: {"date_format": "dd/MM/yyyy"}[key],
    )


@pytest.fixture
def patient_record() -> dict:
    """A complete persisted record with a sparse chart."""
    teeth = [None] * 86
    teeth[11] = {"ISO": 11, "condition": "filled", "notes": ["Composite, distal"]}
    teeth[85] = {"ISO": 85, "notes": ["Watch for caries"]}
    return {
        "_id": "p1",
        "name": "Ada Lovelace",
        "birthYear": 1990,
        "gender": "female",
        "tags": "vip",
        "address": "12 St James Square",
        "email": "ada@example.com",
        "phone": "555-0101",
        "medicalHistory": ["Penicillin allergy", "Asthma"],
        "gallery": ["img/ada-1.jpg"],
        "teeth": teeth,
        "labels": [
            {"text": "Anxious", "type": "warning"},
            {"text": "Insured", "type": "success"},
        ],
    }

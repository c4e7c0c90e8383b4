"""Collaborators that patient derivations read from.

A ``RecordContext`` bundles the external pieces a patient needs to compute
its derived attributes: the appointment ledger, today's date, a date
formatter, a settings lookup and the display text for enum values. Patients
take a context at construction; the default one reads an empty ledger, the
system clock and the application settings.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Callable, Optional

from src.domain.appointments import Appointment
from src.domain.ports import AppointmentQueryPort


class EmptyLedger(AppointmentQueryPort):
    """Ledger with no appointments, used when no ledger is wired in."""

    def list_by_patient(self, patient_id: str) -> list[Appointment]:
        return []

    def find(self, appointment_id: str) -> Optional[Appointment]:
        return None

    def list_all(self) -> list[Appointment]:
        return []


def _default_format_date(timestamp_ms: float, pattern: str) -> str:
    from src.infrastructure.formatting import format_date
    return format_date(timestamp_ms, pattern)


def _default_get_setting(key: str) -> Any:
    from src.infrastructure.settings import get_setting
    return get_setting(key)


def _identity(text: str) -> str:
    return text


@dataclass
class RecordContext:
    """Injected collaborators for patient derivations.

    Parameters:
        appointments: Read-only appointment ledger
        today: Clock returning the current local date
        format_date: ``(timestamp_ms, pattern) -> str``
        get_setting: Settings lookup (``date_format`` is read)
        display: Maps an enum wire string to its display text
    """

    appointments: AppointmentQueryPort = field(default_factory=EmptyLedger)
    today: Callable[[], date] = date.today
    format_date: Callable[[float, str], str] = _default_format_date
    get_setting: Callable[[str], Any] = _default_get_setting
    display: Callable[[str], str] = _identity


default_context = RecordContext()

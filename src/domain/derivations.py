"""Derived patient attributes.

Every function here is a pure function of the patient's own fields, the
appointments handed in, and the date passed as ``today``. Nothing is cached;
callers recompute on each read. The ``Patient`` properties are thin wrappers
around these functions.
"""

from datetime import date
from typing import TYPE_CHECKING, Callable, Iterable, Optional, Sequence

from src.domain.appointments import Appointment

if TYPE_CHECKING:
    from src.domain.patient import Patient


def compute_age(birth_year: int, current_year: int) -> int:
    """Age in years.

    When the raw difference exceeds ``birth_year`` itself (a nonsensical
    birth year such as 2 or 0), ``birth_year`` is returned instead of the
    difference. Existing consumers rely on this exact guard.
    """
    diff = current_year - birth_year
    return birth_year if diff > birth_year else diff


def appointments_for_patient(
    patient_id: str, appointments: Iterable[Appointment]
) -> list[Appointment]:
    """Filter a ledger down to one patient, keeping ledger order."""
    return [a for a in appointments if a.patient_id == patient_id]


def last_appointment(appointments: Sequence[Appointment]) -> Optional[Appointment]:
    """Most recent completed appointment, or None."""
    done = [a for a in appointments if a.is_done]
    if not done:
        return None
    return max(done, key=lambda a: a.date)


def is_same_or_future_day(candidate: date, today: date) -> bool:
    """Component-wise day comparison used to pick upcoming appointments.

    Year, month and day are each compared on their own, not as a calendar
    date. A candidate in an earlier month of a later year (today 2024-06-15,
    candidate 2025-01-20) is therefore rejected. Kept as-is for compatibility
    with existing records and reports.
    """
    return (
        today.year <= candidate.year
        and today.month <= candidate.month
        and today.day <= candidate.day
    )


def next_appointment(
    appointments: Sequence[Appointment], today: date
) -> Optional[Appointment]:
    """Earliest pending appointment passing ``is_same_or_future_day``."""
    pending = [
        a for a in appointments
        if not a.is_done and is_same_or_future_day(a.local_datetime.date(), today)
    ]
    if not pending:
        return None
    return min(pending, key=lambda a: a.date)


def total_payments(appointments: Iterable[Appointment]) -> float:
    return sum((a.paid_amount for a in appointments), 0)


def outstanding_amount(appointments: Iterable[Appointment]) -> float:
    return sum((a.outstanding_amount for a in appointments), 0)


def overpaid_amount(appointments: Iterable[Appointment]) -> float:
    return sum((a.overpaid_amount for a in appointments), 0)


def difference_amount(appointments: Sequence[Appointment]) -> float:
    """Positive when the patient has overpaid, negative when they owe."""
    return overpaid_amount(appointments) - outstanding_amount(appointments)


def format_amount(amount: float) -> str:
    """Render an amount without a trailing ``.0`` for whole numbers."""
    if float(amount).is_integer():
        return str(int(amount))
    return str(amount)


def _appointment_parts(
    appointment: Optional[Appointment],
    format_date: Callable[[float, str], str],
    date_format: str,
) -> list[str]:
    if appointment is None:
        return ["", ""]
    return [appointment.treatment_type, format_date(appointment.date, date_format)]


def searchable_string(
    patient: "Patient",
    appointments: Sequence[Appointment],
    today: date,
    format_date: Callable[[float, str], str],
    date_format: str,
    display: Callable[[str], str],
) -> str:
    """Lowercase text blob used for substring search over patients.

    Parameters:
        patient: Patient whose own fields are indexed
        appointments: The patient's appointments
        today: Reference date for age and next appointment
        format_date: ``(timestamp_ms, pattern) -> str``
        date_format: Pattern passed to ``format_date``
        display: Resolves the gender wire string to display text
    """
    age = compute_age(patient.birth_year, today.year)
    upcoming = next_appointment(appointments, today)
    previous = last_appointment(appointments)
    difference = difference_amount(appointments)

    parts: list[str] = [
        str(age),
        str(patient.birth_year),
        patient.phone,
        patient.email,
        patient.address,
        display(patient.gender.value),
        patient.name,
        " ".join(label.text for label in patient.labels),
        " ".join(patient.medical_history),
        " ".join(" ".join(tooth.notes) for tooth in patient.chart.values()),
    ]
    parts += _appointment_parts(upcoming, format_date, date_format)
    parts += _appointment_parts(previous, format_date, date_format)
    parts.append(
        "outstanding " + format_amount(outstanding_amount(appointments)) if difference < 0 else ""
    )
    parts.append(
        "Overpaid " + format_amount(overpaid_amount(appointments)) if difference > 0 else ""
    )
    return "\n".join(parts).lower()

"""In-memory appointment ledger adapter.

Implements ``AppointmentQueryPort`` over a plain list. The ledger's own
editing rules live elsewhere; this adapter only holds entries and answers the
read queries the patient core makes. Entries can be built from the ledger's
persisted JSON records, with bad records triaged out rather than failing the
whole load.
"""

import json
import logging
from pathlib import Path
from typing import Any, Iterable, Optional, Union

from pydantic import ValidationError as PydanticValidationError

from src.domain.appointments import Appointment
from src.domain.ports import AppointmentQueryPort, StoreError

logger = logging.getLogger(__name__)


class InMemoryAppointmentLedger(AppointmentQueryPort):
    """Appointment ledger held in process memory, in insertion order."""

    def __init__(self, appointments: Iterable[Appointment] = ()):
        self._appointments: list[Appointment] = list(appointments)

    @classmethod
    def from_records(cls, records: Iterable[dict[str, Any]]) -> "InMemoryAppointmentLedger":
        """Build a ledger from persisted appointment records.

        Records that fail validation are logged and skipped.
        """
        ledger = cls()
        for index, record in enumerate(records):
            try:
                ledger.add(Appointment.model_validate(record))
            except PydanticValidationError as e:
                logger.warning(
                    f"Skipping appointment record {index}: {e.error_count()} validation error(s)"
                )
        return ledger

    @classmethod
    def from_json_file(cls, path: Union[str, Path]) -> "InMemoryAppointmentLedger":
        """Load a ledger from a JSON array file.

        Raises:
            StoreError: If the file cannot be read or is not a JSON array
        """
        source = Path(path)
        try:
            data = json.loads(source.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise StoreError(f"Cannot read appointments from {source}: {e}", source=str(source)) from e
        if not isinstance(data, list):
            raise StoreError(f"Appointments file must hold a JSON array: {source}", source=str(source))
        ledger = cls.from_records(data)
        logger.info(f"Loaded {len(ledger)} appointments from {source}")
        return ledger

    def add(self, appointment: Appointment) -> None:
        self._appointments.append(appointment)

    def remove(self, appointment_id: str) -> bool:
        for index, appointment in enumerate(self._appointments):
            if appointment.id == appointment_id:
                del self._appointments[index]
                return True
        return False

    def list_by_patient(self, patient_id: str) -> list[Appointment]:
        return [a for a in self._appointments if a.patient_id == patient_id]

    def find(self, appointment_id: str) -> Optional[Appointment]:
        for appointment in self._appointments:
            if appointment.id == appointment_id:
                return appointment
        return None

    def list_all(self) -> list[Appointment]:
        return list(self._appointments)

    def __len__(self) -> int:
        return len(self._appointments)

"""Domain Ports - Abstract contracts for the collections a patient depends on.

The patient core does not own the appointment ledger or the patient list.
It reaches them through the ports below, so any store (in-memory, JSON file,
a database adapter) can be injected without touching the domain.

Architecture:
    - Pure abstract interfaces with zero infrastructure dependencies
    - Adapters in ``src.adapters`` implement these ports
    - Single-threaded use; implementations need no locking
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Optional

from src.domain.appointments import Appointment

if TYPE_CHECKING:
    from src.domain.patient import Patient


# ============================================================================
# Custom Exception Hierarchy
# ============================================================================

class RecordError(Exception):
    """Base exception for patient record handling."""
    pass


class PatientRecordError(RecordError):
    """Raised when a persisted patient record cannot be decoded at all.

    Field-level problems (unknown enum strings, malformed lists) are
    recovered locally and never raise this.

    Attributes:
        record_id: Identifier of the offending record, if it had one
        details: Validation messages
    """

    def __init__(self, message: str, record_id: Optional[str] = None, details: Optional[list] = None):
        super().__init__(message)
        self.record_id = record_id
        self.details = details or []


class PatientNotFoundError(RecordError):
    """Raised when a repository lookup by id finds nothing."""

    def __init__(self, patient_id: str):
        super().__init__(f"Patient not found: {patient_id}")
        self.patient_id = patient_id


class StoreError(RecordError):
    """Raised when a file-backed store cannot be read or written.

    Attributes:
        source: Path of the store file
    """

    def __init__(self, message: str, source: Optional[str] = None):
        super().__init__(message)
        self.source = source


# ============================================================================
# Ports
# ============================================================================

class AppointmentQueryPort(ABC):
    """Read-only view over the appointment ledger."""

    @abstractmethod
    def list_by_patient(self, patient_id: str) -> list[Appointment]:
        """Return the patient's appointments in ledger order."""
        pass

    @abstractmethod
    def find(self, appointment_id: str) -> Optional[Appointment]:
        pass

    @abstractmethod
    def list_all(self) -> list[Appointment]:
        pass


class PatientRepositoryPort(ABC):
    """Owning collection of patients."""

    @abstractmethod
    def find(self, patient_id: str) -> Optional["Patient"]:
        pass

    @abstractmethod
    def get(self, patient_id: str) -> "Patient":
        """Like ``find`` but raises PatientNotFoundError."""
        pass

    @abstractmethod
    def list_all(self) -> list["Patient"]:
        pass

    @abstractmethod
    def add(self, patient: "Patient") -> None:
        """Insert or replace a patient by id."""
        pass

    @abstractmethod
    def remove(self, patient_id: str) -> bool:
        """Remove a patient; returns False if it was not present."""
        pass

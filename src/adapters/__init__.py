"""Adapters layer for Dental-Records.

This module contains the adapters that hold the collections a patient
depends on. Adapters implement Port interfaces defined in the domain layer
and handle the transformation between persisted JSON and domain objects.
"""

from src.adapters.appointment_ledger import InMemoryAppointmentLedger
from src.adapters.patient_store import InMemoryPatientRepository, JSONFilePatientStore

__all__ = ["InMemoryAppointmentLedger", "InMemoryPatientRepository", "JSONFilePatientStore"]

"""Patient repository adapters.

``InMemoryPatientRepository`` is the explicit owning collection for patients.
``JSONFilePatientStore`` adds loading from and saving to a JSON file holding
an array of persisted patient records.

Architecture:
    - Implements PatientRepositoryPort (Hexagonal Architecture)
    - Fail-safe loading: a record that cannot be decoded is logged and
      skipped, the rest of the file still loads
"""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Iterable, Optional, Union

from src.domain.context import RecordContext
from src.domain.patient import Patient
from src.domain.ports import (
    PatientNotFoundError,
    PatientRecordError,
    PatientRepositoryPort,
    StoreError,
)

logger = logging.getLogger(__name__)


class InMemoryPatientRepository(PatientRepositoryPort):
    """Patients keyed by id, iterated in insertion order."""

    def __init__(self, patients: Iterable[Patient] = ()):
        self._patients: dict[str, Patient] = {}
        for patient in patients:
            self.add(patient)

    def find(self, patient_id: str) -> Optional[Patient]:
        return self._patients.get(patient_id)

    def get(self, patient_id: str) -> Patient:
        patient = self._patients.get(patient_id)
        if patient is None:
            raise PatientNotFoundError(patient_id)
        return patient

    def list_all(self) -> list[Patient]:
        return list(self._patients.values())

    def add(self, patient: Patient) -> None:
        self._patients[patient.id] = patient

    def remove(self, patient_id: str) -> bool:
        return self._patients.pop(patient_id, None) is not None

    def search(self, query: str) -> list[Patient]:
        """Patients whose searchable text contains ``query`` (case-insensitive)."""
        return [p for p in self._patients.values() if p.matches(query)]

    def __len__(self) -> int:
        return len(self._patients)

    def __contains__(self, patient_id: object) -> bool:
        return patient_id in self._patients


class JSONFilePatientStore(InMemoryPatientRepository):
    """Patient repository persisted as a JSON array file.

    Parameters:
        path: JSON file location
        context: Context handed to every decoded patient
    """

    def __init__(self, path: Union[str, Path], context: Optional[RecordContext] = None):
        super().__init__()
        self.path = Path(path)
        self.context = context
        self.rejected: list[dict[str, Any]] = []

    def load(self) -> int:
        """Replace the in-memory contents with the file's records.

        A missing file loads as an empty store.

        Returns:
            Number of patients loaded

        Raises:
            StoreError: If the file is unreadable or not a JSON array
        """
        self._patients.clear()
        self.rejected = []
        if not self.path.exists():
            logger.info(f"Patient store {self.path} does not exist yet, starting empty")
            return 0
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise StoreError(f"Cannot read patients from {self.path}: {e}", source=str(self.path)) from e
        if not isinstance(data, list):
            raise StoreError(f"Patients file must hold a JSON array: {self.path}", source=str(self.path))

        for index, record in enumerate(data):
            try:
                self.add(Patient.from_dict(record, context=self.context))
            except PatientRecordError as e:
                logger.warning(
                    f"Skipping patient record {index}: {e}",
                    extra={"patient_id": e.record_id, "record_index": index},
                )
                self.rejected.append({"index": index, "record_id": e.record_id, "error": str(e)})

        logger.info(f"Loaded {len(self)} patients from {self.path} ({len(self.rejected)} rejected)")
        return len(self)

    def save(self) -> None:
        """Write every patient to the file, replacing it atomically.

        Raises:
            StoreError: If the file cannot be written
        """
        records = [patient.to_dict() for patient in self._patients.values()]
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, suffix=".tmp")
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                json.dump(records, handle, ensure_ascii=False, indent=2)
            os.replace(tmp_name, self.path)
        except OSError as e:
            raise StoreError(f"Cannot write patients to {self.path}: {e}", source=str(self.path)) from e
        logger.info(f"Saved {len(records)} patients to {self.path}")

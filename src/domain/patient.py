"""Patient aggregate.

A ``Patient`` owns its scalar fields, three tracked lists (labels, medical
history, gallery) and a dental chart. Derived attributes (age, appointment
summary, balances, search text) are read-only properties computed on every
access from the patient's own state and its ``RecordContext``.

Change notification:
    ``version`` increments once for every in-place mutation of a tracked
    list or a chart entry. Rebinding a whole list (``patient.labels = [...]``)
    does not increment it; the new list is wrapped so later in-place edits are
    tracked again and the replaced list stops reporting. Consumers keep the
    last version they rendered and call ``changed_since``.

Serialization:
    ``from_dict``/``load`` decode the flat persisted record through
    ``PatientRecord``; ``to_dict`` produces it. ``version`` is never persisted.
"""

import logging
from typing import Any, Dict, Iterable, Optional, Union

from pydantic import ValidationError as PydanticValidationError

from src.domain import derivations
from src.domain.appointments import Appointment
from src.domain.context import RecordContext, default_context
from src.domain.enums import Gender
from src.domain.identifiers import generate_id
from src.domain.ports import PatientRecordError
from src.domain.records import Label, PatientRecord, ToothRecord
from src.domain.teeth import Tooth, chart_to_list, initialize_chart, load_tooth
from src.domain.tracking import TrackedList

logger = logging.getLogger(__name__)


class Patient:
    """Patient record with its dental chart and ledger-backed derivations.

    Parameters:
        record: Optional persisted record (dict or PatientRecord) to decode
        context: Collaborators for derivations; defaults to ``default_context``
    """

    def __init__(
        self,
        record: Optional[Union[Dict[str, Any], PatientRecord]] = None,
        context: Optional[RecordContext] = None,
    ):
        self._id: str = generate_id()
        self._version: int = 0
        self.context: RecordContext = context or default_context

        self.name: str = ""
        self.birth_year: int = 0
        self.gender: Gender = Gender.MALE
        self.tags: str = ""
        self.address: str = ""
        self.email: str = ""
        self.phone: str = ""

        self._labels = TrackedList()
        self._medical_history = TrackedList()
        self._gallery = TrackedList()
        self.chart: Dict[int, Tooth] = initialize_chart()

        if record is not None:
            self.load(record)
        else:
            self._observe_all()

    # ------------------------------------------------------------------
    # Identity and change tracking
    # ------------------------------------------------------------------

    @property
    def id(self) -> str:
        return self._id

    @property
    def version(self) -> int:
        return self._version

    def _bump(self) -> None:
        self._version += 1

    def changed_since(self, version: int) -> bool:
        """True if any tracked mutation happened after ``version`` was read."""
        return self._version != version

    def _observe_all(self) -> None:
        self._labels.observe(self._bump)
        self._medical_history.observe(self._bump)
        self._gallery.observe(self._bump)
        for tooth in self.chart.values():
            tooth.observe(self._bump)

    def _detach_all(self) -> None:
        self._labels.observe(None)
        self._medical_history.observe(None)
        self._gallery.observe(None)
        for tooth in self.chart.values():
            tooth.observe(None)

    @property
    def labels(self) -> TrackedList:
        return self._labels

    @labels.setter
    def labels(self, value: Iterable[Label]) -> None:
        self._labels.observe(None)
        self._labels = TrackedList(value, listener=self._bump)

    @property
    def medical_history(self) -> TrackedList:
        return self._medical_history

    @medical_history.setter
    def medical_history(self, value: Iterable[str]) -> None:
        self._medical_history.observe(None)
        self._medical_history = TrackedList(value, listener=self._bump)

    @property
    def gallery(self) -> TrackedList:
        return self._gallery

    @gallery.setter
    def gallery(self, value: Iterable[str]) -> None:
        self._gallery.observe(None)
        self._gallery = TrackedList(value, listener=self._bump)

    # ------------------------------------------------------------------
    # Derived attributes
    # ------------------------------------------------------------------

    @property
    def age(self) -> int:
        return derivations.compute_age(self.birth_year, self.context.today().year)

    @property
    def appointments(self) -> list[Appointment]:
        return derivations.appointments_for_patient(
            self._id, self.context.appointments.list_by_patient(self._id)
        )

    @property
    def last_appointment(self) -> Optional[Appointment]:
        return derivations.last_appointment(self.appointments)

    @property
    def next_appointment(self) -> Optional[Appointment]:
        return derivations.next_appointment(self.appointments, self.context.today())

    @property
    def has_primary_teeth(self) -> bool:
        return self.age < 18

    @property
    def has_permanent_teeth(self) -> bool:
        return self.age > 5

    @property
    def total_payments(self) -> float:
        return derivations.total_payments(self.appointments)

    @property
    def outstanding_amount(self) -> float:
        return derivations.outstanding_amount(self.appointments)

    @property
    def overpaid_amount(self) -> float:
        return derivations.overpaid_amount(self.appointments)

    @property
    def difference_amount(self) -> float:
        return derivations.difference_amount(self.appointments)

    @property
    def searchable_string(self) -> str:
        ctx = self.context
        return derivations.searchable_string(
            self,
            self.appointments,
            today=ctx.today(),
            format_date=ctx.format_date,
            date_format=ctx.get_setting("date_format"),
            display=ctx.display,
        )

    def matches(self, query: str) -> bool:
        """Case-insensitive substring search over ``searchable_string``."""
        return query.strip().lower() in self.searchable_string

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    @classmethod
    def from_dict(
        cls, data: Union[Dict[str, Any], PatientRecord], context: Optional[RecordContext] = None
    ) -> "Patient":
        return cls(data, context=context)

    def load(self, data: Union[Dict[str, Any], PatientRecord]) -> None:
        """Overwrite this patient's state from a persisted record.

        Chart positions present in the record replace the current entry;
        all others are left untouched. Tracking is re-registered afterwards.

        Raises:
            PatientRecordError: If the record is not a mapping or lacks ``_id``
        """
        record = self._validate(data)
        self._detach_all()

        self._id = record.id
        self.name = record.name
        self.birth_year = record.birth_year
        self.gender = record.gender
        self.tags = record.tags
        self.address = record.address
        self.email = record.email
        self.phone = record.phone
        self._medical_history = TrackedList(record.medical_history)
        self._gallery = TrackedList(record.gallery)
        self._labels = TrackedList(
            Label(text=label.text, category=label.category) for label in record.labels
        )
        for tooth_record in record.teeth:
            if tooth_record is None:
                continue
            load_tooth(self.chart, tooth_record.model_dump(by_alias=True))

        self._observe_all()
        logger.debug(f"Loaded patient {self._id}")

    @staticmethod
    def _validate(data: Union[Dict[str, Any], PatientRecord]) -> PatientRecord:
        if isinstance(data, PatientRecord):
            return data
        if not isinstance(data, dict):
            raise PatientRecordError(
                f"Patient record must be a JSON object, got {type(data).__name__}"
            )
        try:
            return PatientRecord.model_validate(data)
        except PydanticValidationError as e:
            record_id = data.get("_id")
            raise PatientRecordError(
                f"Invalid patient record {record_id!r}: {e.error_count()} error(s)",
                record_id=str(record_id) if record_id is not None else None,
                details=[err.get("msg") for err in e.errors()],
            ) from e

    def to_record(self) -> PatientRecord:
        teeth = [
            ToothRecord.model_validate(entry) if entry is not None else None
            for entry in chart_to_list(self.chart)
        ]
        return PatientRecord(
            id=self._id,
            name=self.name,
            birth_year=self.birth_year,
            gender=self.gender,
            tags=self.tags,
            address=self.address,
            email=self.email,
            phone=self.phone,
            medical_history=list(self._medical_history),
            gallery=list(self._gallery),
            teeth=teeth,
            labels=[Label(text=label.text, category=label.category) for label in self._labels],
        )

    def to_dict(self) -> Dict[str, Any]:
        """Encode to the flat persisted record."""
        return self.to_record().to_wire()

    def __repr__(self) -> str:
        return f"<Patient {self._id} - {self.name}>"

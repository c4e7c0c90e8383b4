"""Read contract for appointments owned by the external ledger.

The patient core never creates or edits appointments. It only reads the
fields below, so the model ignores anything else the ledger stores.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Treatment(BaseModel):
    """Treatment linked to an appointment; only its type name is read."""

    model_config = ConfigDict(extra="ignore")

    type: str = Field("", description="Treatment type name")


class Appointment(BaseModel):
    """Ledger entry as seen by the patient core.

    Parameters:
        id: Appointment identifier (wire ``_id``)
        patient_id: Owning patient identifier (wire ``patientID``)
        date: Appointment time in epoch milliseconds
        is_done: Whether the appointment has been completed
        treatment: Linked treatment, if any
        paid_amount: Amount paid
        outstanding_amount: Amount still owed
        overpaid_amount: Amount paid beyond the price
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str = Field("", alias="_id")
    patient_id: str = Field(..., alias="patientID")
    date: float = Field(0, description="Epoch milliseconds")
    is_done: bool = Field(False, alias="isDone")
    treatment: Optional[Treatment] = None
    paid_amount: float = Field(0, alias="paidAmount")
    outstanding_amount: float = Field(0, alias="outstandingAmount")
    overpaid_amount: float = Field(0, alias="overpaidAmount")

    @field_validator("paid_amount", "outstanding_amount", "overpaid_amount", "date", mode="before")
    @classmethod
    def missing_number_is_zero(cls, v):
        """Treat absent or null numeric fields as zero."""
        if v is None or v == "":
            return 0
        return v

    @property
    def local_datetime(self) -> datetime:
        return datetime.fromtimestamp(self.date / 1000)

    @property
    def treatment_type(self) -> str:
        return self.treatment.type if self.treatment else ""

"""Student fee payments."""
from datetime import date, datetime
from enum import Enum
from typing import Optional

from beanie import Document, Indexed
from pydantic import BaseModel, ConfigDict, Field

from schooldesk.timeutil import utcnow


class PaymentStatus(str, Enum):
    PAID = "Paid"
    PENDING = "Pending"
    PARTIAL = "Partial"
    OVERDUE = "Overdue"


class Payment(Document):
    """Payment document: amount in minor units, payment date, purpose, status."""

    school_id: Indexed(str)
    student_identifier: Indexed(str)  # student app id, e.g. STU-0042
    student_name: str = ""
    grade: str = ""
    amount_paid_cents: int = 0
    payment_date: datetime
    payment_for: str
    status: PaymentStatus = PaymentStatus.PAID
    notes: Optional[str] = None
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: Optional[datetime] = None

    class Settings:
        name = "payments"
        use_state_management = True


class PaymentCreate(BaseModel):
    model_config = ConfigDict(extra="ignore")
    student_identifier: str
    student_name: str = ""
    grade: str = ""
    amount_paid: float = Field(ge=0)
    payment_date: date
    payment_for: str
    notes: Optional[str] = None
    # Accepted for form compatibility; new payments are always recorded as Paid.
    status: Optional[PaymentStatus] = None


class PaymentUpdate(BaseModel):
    model_config = ConfigDict(extra="ignore")
    amount_paid: Optional[float] = Field(default=None, ge=0)
    payment_date: Optional[date] = None
    payment_for: Optional[str] = None
    notes: Optional[str] = None


class PaymentOut(BaseModel):
    id: str
    school_id: str
    student_identifier: str
    student_name: str
    grade: str
    amount_paid: str  # "$42.50"
    payment_date: str
    payment_for: str
    status: PaymentStatus
    notes: Optional[str] = None
    created_at: str
    updated_at: Optional[str] = None

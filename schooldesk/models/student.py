from datetime import date, datetime
from enum import Enum
from typing import Optional

import pymongo
from beanie import Document, Indexed
from pydantic import BaseModel, ConfigDict, Field
from pymongo import IndexModel

from schooldesk.timeutil import utcnow


class Gender(str, Enum):
    MALE = "male"
    FEMALE = "female"


class StudentStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    GRADUATED = "graduated"


class PaymentType(str, Enum):
    PAYER = "Payer"
    DISCOUNT = "Discount"
    FREE = "Free"


class Student(Document):
    """A student enrolled at a school. ``grade`` is the classroom name they sit in."""

    school_id: Indexed(str)
    app_id: str  # student login / card id, e.g. STU-0042
    full_name: str
    contact_number: Optional[str] = None
    gender: Gender
    date_of_birth: datetime
    grade: str
    parent_app_id: str
    parent_name: str
    parent_contact: str
    parent_email: Optional[str] = None
    status: StudentStatus = StudentStatus.ACTIVE
    payment_type: PaymentType = PaymentType.PAYER
    social_status: Optional[str] = None
    fee_amount: Optional[float] = None
    uses_bus: bool = False
    registration_date: datetime = Field(default_factory=utcnow)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: Optional[datetime] = None

    class Settings:
        name = "students"
        use_state_management = True
        indexes = [
            IndexModel([("school_id", pymongo.ASCENDING), ("app_id", pymongo.ASCENDING)], name="school_app_id"),
            IndexModel([("school_id", pymongo.ASCENDING), ("grade", pymongo.ASCENDING)], name="school_grade"),
        ]


class StudentCreate(BaseModel):
    model_config = ConfigDict(extra="ignore")
    app_id: str
    full_name: str
    contact_number: Optional[str] = None
    gender: Gender
    date_of_birth: date
    grade: str
    parent_app_id: str
    parent_name: str
    parent_contact: str
    parent_email: Optional[str] = None
    payment_type: PaymentType = PaymentType.PAYER
    social_status: Optional[str] = None
    fee_amount: Optional[float] = Field(None, ge=0)
    uses_bus: bool = False


class StudentUpdate(BaseModel):
    """Everything but the school and the app id can change."""

    model_config = ConfigDict(extra="ignore")
    full_name: Optional[str] = None
    contact_number: Optional[str] = None
    gender: Optional[Gender] = None
    date_of_birth: Optional[date] = None
    grade: Optional[str] = None
    parent_app_id: Optional[str] = None
    parent_name: Optional[str] = None
    parent_contact: Optional[str] = None
    parent_email: Optional[str] = None
    status: Optional[StudentStatus] = None
    payment_type: Optional[PaymentType] = None
    social_status: Optional[str] = None
    fee_amount: Optional[float] = Field(None, ge=0)
    uses_bus: Optional[bool] = None


class StudentOut(BaseModel):
    id: str
    school_id: str
    app_id: str
    full_name: str
    contact_number: Optional[str] = None
    gender: Gender
    date_of_birth: str
    grade: str
    parent_app_id: str
    parent_name: str
    parent_contact: str
    parent_email: Optional[str] = None
    status: StudentStatus
    payment_type: PaymentType
    social_status: Optional[str] = None
    fee_amount: Optional[float] = None
    uses_bus: bool
    registration_date: str

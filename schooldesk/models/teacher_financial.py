"""Monthly payroll records per teacher."""
from datetime import datetime
from enum import Enum
from typing import Optional

import pymongo
from beanie import Document, Indexed
from pydantic import BaseModel, ConfigDict, Field
from pymongo import IndexModel

from schooldesk.timeutil import utcnow


class SalaryStatus(str, Enum):
    PAID = "Paid"
    PENDING = "Pending"
    PARTIALLY_PAID = "Partially Paid"


class TeacherFinancialRecord(Document):
    school_id: Indexed(str)
    teacher_id: str  # Teacher.app_id
    teacher_name: str
    month: Indexed(str)  # "October 2026"
    base_salary: float = 0.0
    bonus: float = 0.0
    deductions: float = 0.0
    advance: float = 0.0
    net_salary: float = 0.0  # (base + bonus) - (deductions + advance)
    paid_amount: float = 0.0
    status: SalaryStatus = SalaryStatus.PENDING
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: Optional[datetime] = None

    class Settings:
        name = "teacher_financials"
        use_state_management = True
        indexes = [
            IndexModel(
                [("school_id", pymongo.ASCENDING), ("teacher_id", pymongo.ASCENDING), ("month", pymongo.ASCENDING)],
                name="one_payroll_record_per_month",
                unique=True,
            ),
        ]


class TeacherFinancialUpdate(BaseModel):
    model_config = ConfigDict(extra="ignore")
    base_salary: Optional[float] = None
    bonus: Optional[float] = None
    deductions: Optional[float] = None
    advance: Optional[float] = None
    paid_amount: Optional[float] = None
    status: Optional[SalaryStatus] = None


class TeacherFinancialOut(BaseModel):
    id: str
    school_id: str
    teacher_id: str
    teacher_name: str
    month: str
    base_salary: float
    bonus: float
    deductions: float
    advance: float
    net_salary: float
    paid_amount: float
    status: SalaryStatus

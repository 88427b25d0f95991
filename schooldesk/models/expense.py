from datetime import date, datetime

from beanie import Document, Indexed
from pydantic import BaseModel, ConfigDict, Field

from schooldesk.timeutil import utcnow


class Expense(Document):
    """School running cost (rent, supplies, utilities...)."""

    school_id: Indexed(str)
    description: str
    category: str = "General"
    amount_cents: int = 0
    expense_date: Indexed(datetime)
    created_at: datetime = Field(default_factory=utcnow)

    class Settings:
        name = "expenses"
        use_state_management = True


class ExpenseCreate(BaseModel):
    model_config = ConfigDict(extra="ignore")
    description: str
    category: str = "General"
    amount: float = Field(ge=0)
    expense_date: date


class ExpenseOut(BaseModel):
    id: str
    school_id: str
    description: str
    category: str
    amount: str
    expense_date: str
    created_at: str


class MonthlyFinanceRow(BaseModel):
    month: str
    collected: str
    expenses: str
    balance: str


class FinanceSummary(BaseModel):
    school_id: str
    year: int
    months: list[MonthlyFinanceRow]
    total: MonthlyFinanceRow

"""School expenses and monthly totals."""
from __future__ import annotations

from schooldesk.models.expense import Expense, ExpenseCreate, ExpenseOut
from schooldesk.money import Money
from schooldesk.services.base import BackendService, require_scope
from schooldesk.timeutil import DateLike, day_end, day_start, month_bounds, to_iso


def expense_to_out(e: Expense) -> ExpenseOut:
    return ExpenseOut(
        id=str(e.id),
        school_id=e.school_id,
        description=e.description,
        category=e.category,
        amount=Money(e.amount_cents).format(),
        expense_date=to_iso(e.expense_date),
        created_at=to_iso(e.created_at),
    )


class ExpenseService(BackendService):
    async def add(self, school_id: str, data: ExpenseCreate) -> ExpenseOut:
        require_scope(school_id=school_id)
        self.backend.require()
        expense = Expense(
            school_id=school_id,
            description=data.description,
            category=data.category,
            amount_cents=Money.from_amount(data.amount).cents,
            expense_date=day_start(data.expense_date),
        )
        await expense.insert()
        return expense_to_out(expense)

    async def list(self, school_id: str) -> list[ExpenseOut]:
        require_scope(school_id=school_id)
        if self._unavailable("get expenses"):
            return []
        expenses = await Expense.find(Expense.school_id == school_id).sort("-expense_date").to_list()
        return [expense_to_out(e) for e in expenses]

    async def total_for_month(self, school_id: str, month: DateLike) -> Money:
        require_scope(school_id=school_id)
        if self._unavailable("get expenses"):
            return Money(0)
        first, last = month_bounds(month)
        expenses = await Expense.find(
            Expense.school_id == school_id,
            Expense.expense_date >= day_start(first),
            Expense.expense_date <= day_end(last),
        ).to_list()
        return Money(sum(e.amount_cents for e in expenses))

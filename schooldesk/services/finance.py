"""Monthly finance report: fees collected against expenses."""
from __future__ import annotations

import calendar
from datetime import date

from schooldesk.models.expense import FinanceSummary, MonthlyFinanceRow
from schooldesk.models.payment import Payment
from schooldesk.money import Money
from schooldesk.services.base import BackendService, require_scope
from schooldesk.services.expenses import ExpenseService
from schooldesk.timeutil import day_end, day_start


def _row(label: str, collected: Money, expenses: Money) -> MonthlyFinanceRow:
    return MonthlyFinanceRow(
        month=label,
        collected=collected.format(),
        expenses=expenses.format(),
        balance=(collected - expenses).format(),
    )


class FinanceService(BackendService):
    async def monthly_summary(self, school_id: str, year: int) -> FinanceSummary:
        require_scope(school_id=school_id)
        expenses_service = ExpenseService(self.backend)
        collected_by_month = [Money(0)] * 12
        if not self._unavailable("build the finance report"):
            payments = await Payment.find(
                Payment.school_id == school_id,
                Payment.payment_date >= day_start(date(year, 1, 1)),
                Payment.payment_date <= day_end(date(year, 12, 31)),
            ).to_list()
            for p in payments:
                i = p.payment_date.month - 1
                collected_by_month[i] = collected_by_month[i] + Money(p.amount_paid_cents)

        rows = []
        total_collected, total_expenses = Money(0), Money(0)
        for month in range(1, 13):
            collected = collected_by_month[month - 1]
            expenses = await expenses_service.total_for_month(school_id, date(year, month, 1))
            total_collected += collected
            total_expenses += expenses
            rows.append(_row(calendar.month_name[month], collected, expenses))
        return FinanceSummary(
            school_id=school_id,
            year=year,
            months=rows,
            total=_row("Total", total_collected, total_expenses),
        )

"""Expenses, teacher payroll and the monthly finance report."""
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Query

from schooldesk.api.deps import Expenses, Finance, Payroll, parse_date
from schooldesk.models.expense import ExpenseCreate, ExpenseOut, FinanceSummary
from schooldesk.models.teacher_financial import TeacherFinancialOut, TeacherFinancialUpdate

router = APIRouter()


@router.get("/expenses", response_model=List[ExpenseOut])
async def list_expenses(school_id: str, expenses: Expenses):
    return await expenses.list(school_id)


@router.post("/expenses", response_model=ExpenseOut, status_code=201)
async def create_expense(school_id: str, data: ExpenseCreate, expenses: Expenses):
    return await expenses.add(school_id, data)


@router.get("/expenses/total")
async def monthly_expense_total(school_id: str, expenses: Expenses, month: str = Query(..., description="Any date in the month")):
    d = parse_date(month, "month")
    total = await expenses.total_for_month(school_id, d)
    return {"month": d.strftime("%Y-%m"), "total": total.format()}


@router.get("/payroll", response_model=List[TeacherFinancialOut])
async def list_payroll(school_id: str, payroll: Payroll, month: Optional[str] = Query(None, description="Any date in the month")):
    """Teacher payroll for a month; unseen months are seeded from the roster."""
    d = parse_date(month, "month") if month else date.today()
    return await payroll.get_for_month(school_id, d)


@router.patch("/payroll/{record_id}", response_model=TeacherFinancialOut)
async def update_payroll_record(school_id: str, record_id: str, data: TeacherFinancialUpdate, payroll: Payroll):
    return await payroll.update(school_id, record_id, data)


@router.get("/reports/monthly", response_model=FinanceSummary)
async def monthly_finance_report(school_id: str, finance: Finance, year: Optional[int] = None):
    return await finance.monthly_summary(school_id, year or date.today().year)

"""Shared dependencies: backend handle, services and path parsing."""
from datetime import date
from typing import Annotated

from fastapi import Depends, HTTPException, Request

from schooldesk.db import Backend
from schooldesk.services import (
    AttendanceService,
    ClassroomService,
    ExamResultService,
    ExpenseService,
    FinanceService,
    PaymentService,
    StaffAttendanceService,
    StudentService,
    TeacherFinancialService,
    TeacherService,
)
from schooldesk.timeutil import as_date


def get_backend(request: Request) -> Backend:
    return request.app.state.backend


def service(cls):
    def provide(backend: Annotated[Backend, Depends(get_backend)]):
        return cls(backend)

    return provide


def parse_date(value: str, field: str = "date") -> date:
    try:
        return as_date(value)
    except ValueError:
        raise HTTPException(status_code=400, detail=f"Invalid {field} format (YYYY-MM-DD)")


# Type aliases for route injection
Attendance = Annotated[AttendanceService, Depends(service(AttendanceService))]
StaffAttendance = Annotated[StaffAttendanceService, Depends(service(StaffAttendanceService))]
Exams = Annotated[ExamResultService, Depends(service(ExamResultService))]
Payments = Annotated[PaymentService, Depends(service(PaymentService))]
Teachers = Annotated[TeacherService, Depends(service(TeacherService))]
Students = Annotated[StudentService, Depends(service(StudentService))]
Classrooms = Annotated[ClassroomService, Depends(service(ClassroomService))]
Payroll = Annotated[TeacherFinancialService, Depends(service(TeacherFinancialService))]
Expenses = Annotated[ExpenseService, Depends(service(ExpenseService))]
Finance = Annotated[FinanceService, Depends(service(FinanceService))]

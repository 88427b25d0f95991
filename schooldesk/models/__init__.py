"""Beanie document models and Pydantic schemas."""
from schooldesk.models.attendance import (
    AttendanceStatus,
    StudentAttendance,
    StaffAttendance,
    AttendanceMark,
    AttendanceOut,
    StaffAttendanceOut,
    AttendanceTally,
)
from schooldesk.models.exam import ExamResult, ExamSubmission, ExamResultOut, SubjectScore, YEARLY_TOTAL_EXAM_TYPE
from schooldesk.models.payment import Payment, PaymentStatus, PaymentCreate, PaymentUpdate, PaymentOut
from schooldesk.models.teacher import Teacher, TeacherCreate, TeacherUpdate, TeacherOut
from schooldesk.models.student import Student, StudentCreate, StudentUpdate, StudentOut, StudentStatus, Gender, PaymentType
from schooldesk.models.classroom import Classroom, ClassroomCreate, ClassroomUpdate, ClassroomOut
from schooldesk.models.teacher_financial import (
    TeacherFinancialRecord,
    TeacherFinancialUpdate,
    TeacherFinancialOut,
    SalaryStatus,
)
from schooldesk.models.expense import Expense, ExpenseCreate, ExpenseOut, MonthlyFinanceRow, FinanceSummary

__all__ = [
    "AttendanceStatus",
    "StudentAttendance",
    "StaffAttendance",
    "AttendanceMark",
    "AttendanceOut",
    "StaffAttendanceOut",
    "AttendanceTally",
    "ExamResult",
    "ExamSubmission",
    "ExamResultOut",
    "SubjectScore",
    "YEARLY_TOTAL_EXAM_TYPE",
    "Payment",
    "PaymentStatus",
    "PaymentCreate",
    "PaymentUpdate",
    "PaymentOut",
    "Teacher",
    "TeacherCreate",
    "TeacherUpdate",
    "TeacherOut",
    "Student",
    "StudentCreate",
    "StudentUpdate",
    "StudentOut",
    "StudentStatus",
    "Gender",
    "PaymentType",
    "Classroom",
    "ClassroomCreate",
    "ClassroomUpdate",
    "ClassroomOut",
    "TeacherFinancialRecord",
    "TeacherFinancialUpdate",
    "TeacherFinancialOut",
    "SalaryStatus",
    "Expense",
    "ExpenseCreate",
    "ExpenseOut",
    "MonthlyFinanceRow",
    "FinanceSummary",
]

"""Data-access services. Each takes a connected ``Backend``."""
from schooldesk.services.attendance import AttendanceService
from schooldesk.services.staff_attendance import StaffAttendanceService
from schooldesk.services.exams import ExamResultService
from schooldesk.services.payments import PaymentService
from schooldesk.services.teachers import TeacherService
from schooldesk.services.students import StudentService
from schooldesk.services.classrooms import ClassroomService
from schooldesk.services.teacher_financials import TeacherFinancialService
from schooldesk.services.expenses import ExpenseService
from schooldesk.services.finance import FinanceService

__all__ = [
    "AttendanceService",
    "StaffAttendanceService",
    "ExamResultService",
    "PaymentService",
    "TeacherService",
    "StudentService",
    "ClassroomService",
    "TeacherFinancialService",
    "ExpenseService",
    "FinanceService",
]

"""SchoolDesk - FastAPI entrypoint."""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from schooldesk.api import (
    attendance,
    classrooms,
    exams,
    finance,
    payments,
    reports,
    staff_attendance,
    students,
    teachers,
)
from schooldesk.config import settings
from schooldesk.db import Backend
from schooldesk.errors import BackendUnavailable, ServiceError

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    backend = app.state.backend
    if not backend.ready:
        try:
            await backend.connect()
        except BackendUnavailable as e:
            logger.error("MongoDB is not reachable at %s. Start it (e.g. docker compose up -d).", backend.url)
            raise RuntimeError("MongoDB connection failed; the application cannot start.") from e
    yield
    backend.close()


def create_app(backend: Backend | None = None) -> FastAPI:
    app = FastAPI(
        title=settings.app_name,
        description="Multi-tenant school management: students, classrooms, attendance, exam results, payments, payroll",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.backend = backend or Backend()

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={"detail": jsonable_encoder(exc.errors())},
        )

    @app.exception_handler(ServiceError)
    async def service_error_handler(request: Request, exc: ServiceError):
        if exc.status_code >= 500:
            logger.warning("%s %s failed: %s", request.method, request.url.path, exc.message)
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[o.strip() for o in settings.cors_origins.split(",") if o.strip()],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # API routes, all scoped to a school
    school = "/api/schools/{school_id}"
    app.include_router(classrooms.router, prefix=f"{school}/classrooms", tags=["Classrooms"])
    app.include_router(attendance.router, prefix=f"{school}/classrooms", tags=["Attendance"])
    app.include_router(staff_attendance.router, prefix=f"{school}/staff-attendance", tags=["Staff Attendance"])
    app.include_router(exams.router, prefix=f"{school}/exam-results", tags=["Exam Results"])
    app.include_router(payments.router, prefix=f"{school}/payments", tags=["Payments"])
    app.include_router(teachers.router, prefix=f"{school}/teachers", tags=["Teachers"])
    app.include_router(students.router, prefix=f"{school}/students", tags=["Students"])
    app.include_router(finance.router, prefix=f"{school}/finance", tags=["Finance"])
    app.include_router(reports.router, prefix=f"{school}/reports", tags=["Reports"])

    @app.get("/health")
    def health():
        return {"status": "ok", "app": settings.app_name, "database": app.state.backend.ready}

    return app


app = create_app()

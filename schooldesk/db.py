"""MongoDB connection and Beanie document registration."""
import logging

from beanie import init_beanie
from motor.motor_asyncio import AsyncIOMotorClient

from schooldesk.config import settings
from schooldesk.errors import BackendUnavailable
from schooldesk.models import (
    StudentAttendance,
    StaffAttendance,
    ExamResult,
    Payment,
    Teacher,
    Student,
    Classroom,
    TeacherFinancialRecord,
    Expense,
)

logger = logging.getLogger(__name__)

DOCUMENT_MODELS = [
    StudentAttendance,
    StaffAttendance,
    ExamResult,
    Payment,
    Teacher,
    Student,
    Classroom,
    TeacherFinancialRecord,
    Expense,
]


class Backend:
    """Handle on the document store, passed to every service.

    A backend starts disconnected; ``connect()`` either leaves it ready or
    raises ``BackendUnavailable`` carrying the original error.
    """

    def __init__(self, url: str | None = None, db_name: str | None = None):
        self.url = url or settings.mongodb_url
        self.db_name = db_name or settings.mongodb_db_name
        self.client = None
        self.error: Exception | None = None

    @property
    def ready(self) -> bool:
        return self.client is not None

    async def connect(self, client=None) -> "Backend":
        """Connect to MongoDB and initialize Beanie ODM.

        ``client`` may be any Motor-compatible client (tests pass an in-memory one).
        """
        try:
            if client is None:
                client = AsyncIOMotorClient(self.url, serverSelectionTimeoutMS=settings.mongodb_timeout_ms)
            await init_beanie(database=client[self.db_name], document_models=DOCUMENT_MODELS)
        except Exception as e:
            self.error = e
            logger.error("Document store initialization failed: %s", e)
            raise BackendUnavailable(f"Document store is not available: {e}") from e
        self.client = client
        self.error = None
        logger.info("Connected to document store %s", self.db_name)
        return self

    def require(self) -> None:
        """Fail fast before a write when the store was never connected."""
        if not self.ready:
            raise BackendUnavailable(
                "Document store is not initialized. Check startup logs for connection errors."
            )

    def close(self) -> None:
        if self.client is not None:
            self.client.close()
            self.client = None

"""Fee payments: add, update, delete and list per school."""
from __future__ import annotations

import logging

from schooldesk.errors import RecordNotFound
from schooldesk.models.payment import Payment, PaymentCreate, PaymentOut, PaymentStatus, PaymentUpdate
from schooldesk.money import Money
from schooldesk.services.base import BackendService, require_scope, safe_object_id
from schooldesk.timeutil import day_start, to_iso, utcnow

logger = logging.getLogger(__name__)


def payment_to_out(p: Payment) -> PaymentOut:
    return PaymentOut(
        id=str(p.id),
        school_id=p.school_id,
        student_identifier=p.student_identifier,
        student_name=p.student_name,
        grade=p.grade,
        amount_paid=Money(p.amount_paid_cents).format(),
        payment_date=to_iso(p.payment_date),
        payment_for=p.payment_for,
        status=p.status,
        notes=p.notes,
        created_at=to_iso(p.created_at),
        updated_at=to_iso(p.updated_at),
    )


class PaymentService(BackendService):
    async def list(self, school_id: str) -> list[PaymentOut]:
        """All of a school's payments, newest first."""
        require_scope(school_id=school_id)
        if self._unavailable("get payments"):
            return []
        payments = await Payment.find(Payment.school_id == school_id).sort("-created_at").to_list()
        return [payment_to_out(p) for p in payments]

    async def add(self, school_id: str, data: PaymentCreate) -> PaymentOut:
        require_scope(school_id=school_id)
        self.backend.require()
        if data.status and data.status != PaymentStatus.PAID:
            # Only fully paid receipts are captured here for now.
            logger.info("Payment for %s requested as %s; recording as Paid", data.student_identifier, data.status.value)
        payment = Payment(
            school_id=school_id,
            student_identifier=data.student_identifier,
            student_name=data.student_name,
            grade=data.grade,
            amount_paid_cents=Money.from_amount(data.amount_paid).cents,
            payment_date=day_start(data.payment_date),
            payment_for=data.payment_for,
            notes=data.notes,
            status=PaymentStatus.PAID,
        )
        await payment.insert()
        return payment_to_out(payment)

    async def get(self, school_id: str, payment_id: str) -> PaymentOut | None:
        require_scope(school_id=school_id)
        if self._unavailable("get payment"):
            return None
        payment = await self._load(school_id, payment_id)
        return payment_to_out(payment) if payment else None

    async def update(self, school_id: str, payment_id: str, changes: PaymentUpdate) -> PaymentOut:
        require_scope(school_id=school_id)
        self.backend.require()
        payment = await self._load(school_id, payment_id)
        if payment is None:
            raise RecordNotFound("Payment not found")

        update_data = changes.model_dump(exclude_unset=True)
        amount_paid = update_data.pop("amount_paid", None)
        if amount_paid is not None:
            payment.amount_paid_cents = Money.from_amount(amount_paid).cents
        payment_date = update_data.pop("payment_date", None)
        if payment_date is not None:
            payment.payment_date = day_start(payment_date)
        if update_data.get("payment_for") is not None:
            payment.payment_for = update_data["payment_for"]
        if "notes" in update_data:
            payment.notes = update_data["notes"]
        payment.updated_at = utcnow()
        await payment.save()
        return payment_to_out(payment)

    async def delete(self, school_id: str, payment_id: str) -> None:
        """Hard delete; deleting a missing payment is a no-op."""
        require_scope(school_id=school_id)
        self.backend.require()
        payment = await self._load(school_id, payment_id)
        if payment is not None:
            await payment.delete()

    async def _load(self, school_id: str, payment_id: str) -> Payment | None:
        oid = safe_object_id(payment_id)
        if oid is None:
            return None
        return await Payment.find_one(Payment.id == oid, Payment.school_id == school_id)

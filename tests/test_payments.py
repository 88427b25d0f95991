from datetime import date, datetime, timedelta, timezone

import pytest

from schooldesk.errors import BackendUnavailable, RecordNotFound
from schooldesk.models.payment import Payment, PaymentCreate, PaymentStatus, PaymentUpdate
from schooldesk.services.payments import PaymentService
from tests.conftest import OTHER_SCHOOL, SCHOOL

pytestmark = pytest.mark.anyio


def new_payment(amount=42.5, **extra):
    fields = dict(
        student_identifier="STU-0001",
        student_name="Tariro Moyo",
        grade="Form 2",
        amount_paid=amount,
        payment_date=date(2026, 10, 5),
        payment_for="Term 3 tuition",
    )
    fields.update(extra)
    return PaymentCreate(**fields)


async def test_add_formats_the_amount(backend):
    out = await PaymentService(backend).add(SCHOOL, new_payment(42.5))

    assert out.amount_paid == "$42.50"
    assert out.status == PaymentStatus.PAID
    assert datetime.fromisoformat(out.payment_date) == datetime(2026, 10, 5, tzinfo=timezone.utc)
    stored = await Payment.find_one(Payment.school_id == SCHOOL)
    assert stored.amount_paid_cents == 4250


async def test_add_always_records_paid(backend):
    out = await PaymentService(backend).add(SCHOOL, new_payment(status=PaymentStatus.PENDING))
    assert out.status == PaymentStatus.PAID


async def test_list_is_newest_first_and_scoped(backend):
    now = datetime.now(timezone.utc)
    for label, age in (("old", 3), ("new", 0), ("middle", 1)):
        await Payment(
            school_id=SCHOOL,
            student_identifier="STU-0001",
            amount_paid_cents=100,
            payment_date=datetime(2026, 10, 1),
            payment_for=label,
            created_at=now - timedelta(days=age),
        ).insert()
    await PaymentService(backend).add(OTHER_SCHOOL, new_payment())

    payments = await PaymentService(backend).list(SCHOOL)
    assert [p.payment_for for p in payments] == ["new", "middle", "old"]


async def test_update_reformats_amount_and_date(backend):
    service = PaymentService(backend)
    created = await service.add(SCHOOL, new_payment(42.5))

    out = await service.update(SCHOOL, created.id, PaymentUpdate(amount_paid=10, payment_date=date(2026, 10, 9)))

    assert out.amount_paid == "$10.00"
    assert out.payment_date.startswith("2026-10-09")
    assert out.payment_for == "Term 3 tuition"
    assert out.updated_at is not None


async def test_update_only_touches_given_fields(backend):
    service = PaymentService(backend)
    created = await service.add(SCHOOL, new_payment(42.5, notes="cash"))

    out = await service.update(SCHOOL, created.id, PaymentUpdate(notes="bank transfer"))

    assert out.notes == "bank transfer"
    assert out.amount_paid == "$42.50"


async def test_update_missing_payment(backend):
    service = PaymentService(backend)
    with pytest.raises(RecordNotFound):
        await service.update(SCHOOL, "64b7f0c2a1b2c3d4e5f60718", PaymentUpdate(notes="x"))
    with pytest.raises(RecordNotFound):
        await service.update(SCHOOL, "not-an-id", PaymentUpdate(notes="x"))


async def test_update_cannot_reach_another_school(backend):
    service = PaymentService(backend)
    created = await service.add(OTHER_SCHOOL, new_payment())
    with pytest.raises(RecordNotFound):
        await service.update(SCHOOL, created.id, PaymentUpdate(amount_paid=1))


async def test_delete_removes_the_payment(backend):
    service = PaymentService(backend)
    created = await service.add(SCHOOL, new_payment())

    await service.delete(SCHOOL, created.id)

    assert await service.get(SCHOOL, created.id) is None
    assert await service.list(SCHOOL) == []
    await service.delete(SCHOOL, created.id)


async def test_delete_is_scoped_to_the_school(backend):
    service = PaymentService(backend)
    created = await service.add(OTHER_SCHOOL, new_payment())

    await service.delete(SCHOOL, created.id)

    assert await service.get(OTHER_SCHOOL, created.id) is not None


async def test_payment_writes_need_a_backend(offline_backend):
    service = PaymentService(offline_backend)
    with pytest.raises(BackendUnavailable):
        await service.add(SCHOOL, new_payment())
    with pytest.raises(BackendUnavailable):
        await service.delete(SCHOOL, "64b7f0c2a1b2c3d4e5f60718")
    assert await service.list(SCHOOL) == []

"""Student fee payments."""
from typing import List

from fastapi import APIRouter, HTTPException

from schooldesk.api.deps import Payments
from schooldesk.models.payment import PaymentCreate, PaymentOut, PaymentUpdate

router = APIRouter()


@router.get("/", response_model=List[PaymentOut])
async def list_payments(school_id: str, payments: Payments):
    return await payments.list(school_id)


@router.post("/", response_model=PaymentOut, status_code=201)
async def create_payment(school_id: str, data: PaymentCreate, payments: Payments):
    return await payments.add(school_id, data)


@router.get("/{payment_id}", response_model=PaymentOut)
async def get_payment(school_id: str, payment_id: str, payments: Payments):
    payment = await payments.get(school_id, payment_id)
    if not payment:
        raise HTTPException(status_code=404, detail="Payment not found")
    return payment


@router.patch("/{payment_id}", response_model=PaymentOut)
async def update_payment(school_id: str, payment_id: str, data: PaymentUpdate, payments: Payments):
    return await payments.update(school_id, payment_id, data)


@router.delete("/{payment_id}", status_code=204)
async def delete_payment(school_id: str, payment_id: str, payments: Payments):
    await payments.delete(school_id, payment_id)

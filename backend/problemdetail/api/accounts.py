"""Accounts API — a purchase endpoint that fails with RFC 7807 problems.

Balances live in memory; this router exists to show problem details
travelling from a handler to the wire.
"""

from dataclasses import dataclass

import structlog
from fastapi import APIRouter

from problemdetail.capability import UNTYPED
from problemdetail.config import get_settings
from problemdetail.models.requests import PurchaseRequest
from problemdetail.models.responses import PurchaseResponse
from problemdetail.problem import (
    ProblemExtension,
    new,
    with_detail,
    with_instance,
    with_status,
    with_title,
    with_validation_level,
)
from problemdetail.validators.models import ValidationLevel

logger = structlog.get_logger()

router = APIRouter()


@dataclass(eq=False)
class OutOfCreditProblem(ProblemExtension):
    """The RFC 7807 example: not enough credit, plus the accounts to top up."""

    balance: int
    accounts: list[str]


def out_of_credit_type() -> str:
    return f"{get_settings().PROBLEM_TYPE_BASE_URL}/out-of-credit"


# ─── Sample Accounts ───

BALANCES: dict[str, int] = {
    "12345": 30,
    "67890": 500,
}


# ─── Endpoints ───


@router.post("/accounts/{account_id}/purchases", response_model=PurchaseResponse)
async def purchase(account_id: str, request_body: PurchaseRequest):
    """Charge `account_id` for an item."""
    if account_id not in BALANCES:
        raise new(
            UNTYPED,
            with_status(404),
            with_detail(f"Account '{account_id}' does not exist"),
            with_validation_level(ValidationLevel.STANDARD),
        )

    balance = BALANCES[account_id]
    if request_body.cost > balance:
        logger.info(
            "purchase_declined",
            account_id=account_id,
            balance=balance,
            cost=request_body.cost,
        )
        raise OutOfCreditProblem(
            problem=new(
                out_of_credit_type(),
                with_title("You do not have enough credit."),
                with_detail(f"Your current balance is {balance}, but that costs {request_body.cost}."),
                with_instance(f"/account/{account_id}/purchases"),
            ),
            balance=balance,
            accounts=[f"/account/{other}" for other in sorted(BALANCES) if other != account_id],
        )

    BALANCES[account_id] = balance - request_body.cost
    return PurchaseResponse(
        account_id=account_id,
        item=request_body.item,
        cost=request_body.cost,
        balance=BALANCES[account_id],
    )

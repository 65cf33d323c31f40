"""Credit transaction API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Path

from multifinance.application.dto import TransactionRequest, TransactionResponse
from multifinance.application.services import CreditTransactionCoordinator
from multifinance.core.dependencies import get_credit_transaction_coordinator
from multifinance.presentation.schemas import (
    ErrorResponseSchema,
    TransactionRequestSchema,
    TransactionResponseSchema,
)

transaction_router = APIRouter(
    prefix="/transactions",
    responses={
        404: {"model": ErrorResponseSchema, "description": "Customer or limit not found"},
        503: {"model": ErrorResponseSchema, "description": "Store unavailable"},
    },
)


def _to_schema(response: TransactionResponse) -> TransactionResponseSchema:
    return TransactionResponseSchema(
        contract_number=response.contract_number,
        customer_nik=response.customer_nik,
        tenor=response.tenor,
        otr=response.otr,
        admin_fee=response.admin_fee,
        installment=response.installment,
        interest=response.interest,
        asset_name=response.asset_name,
        created_at=response.created_at,
    )


@transaction_router.post(
    "",
    response_model=TransactionResponseSchema,
    status_code=201,
    summary="Record Transaction",
    description="""
    Record a purchase on credit against the customer's limit for the tenor.

    The limit is reduced by otr + admin_fee. The transaction and the
    reduced limit are committed together or not at all.
    """,
    responses={
        201: {"description": "Transaction recorded"},
        422: {"model": ErrorResponseSchema, "description": "Limit exceeded"},
        504: {"model": ErrorResponseSchema, "description": "Deadline exceeded"},
    },
)
async def create_transaction(
    request: TransactionRequestSchema,
    coordinator: Annotated[
        CreditTransactionCoordinator, Depends(get_credit_transaction_coordinator)
    ],
) -> TransactionResponseSchema:
    dto = TransactionRequest(
        customer_nik=request.customer_nik,
        tenor=request.tenor,
        otr=request.otr,
        admin_fee=request.admin_fee,
        installment=request.installment,
        interest=request.interest,
        asset_name=request.asset_name,
    )

    transaction = await coordinator.record(dto)

    return _to_schema(TransactionResponse.from_entity(transaction))


@transaction_router.get(
    "/{contract_number}",
    response_model=TransactionResponseSchema,
    summary="Get Transaction",
    description="Retrieve a recorded transaction by its contract number.",
    responses={
        200: {"description": "Transaction retrieved successfully"},
    },
)
async def get_transaction(
    contract_number: Annotated[
        str,
        Path(min_length=1, max_length=64, description="Contract number of the transaction"),
    ],
    coordinator: Annotated[
        CreditTransactionCoordinator, Depends(get_credit_transaction_coordinator)
    ],
) -> TransactionResponseSchema:
    transaction = await coordinator.get_transaction(contract_number)

    return _to_schema(TransactionResponse.from_entity(transaction))

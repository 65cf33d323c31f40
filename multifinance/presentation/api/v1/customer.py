"""Customer onboarding, limit and history endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query

from multifinance.application.dto import CustomerRequest, LimitProvision
from multifinance.application.services import CustomerService
from multifinance.core.dependencies import get_customer_service
from multifinance.presentation.schemas import (
    CreditLimitSchema,
    CreditLimitsResponseSchema,
    CustomerRequestSchema,
    CustomerResponseSchema,
    ErrorResponseSchema,
    LimitProvisionRequestSchema,
    TransactionHistoryResponseSchema,
    TransactionResponseSchema,
)

customer_router = APIRouter(
    prefix="/customers",
    responses={
        404: {"model": ErrorResponseSchema, "description": "Customer not found"},
    },
)

CustomerNik = Annotated[
    str,
    Path(min_length=1, max_length=32, description="National identity number of the customer"),
]


def _limits_to_schema(response) -> CreditLimitsResponseSchema:
    return CreditLimitsResponseSchema(
        customer_nik=response.customer_nik,
        limits=[
            CreditLimitSchema(tenor=limit.tenor, remaining_amount=limit.remaining_amount)
            for limit in response.limits
        ],
    )


@customer_router.post(
    "",
    response_model=CustomerResponseSchema,
    status_code=201,
    summary="Register Customer",
    responses={
        201: {"description": "Customer registered"},
        409: {"model": ErrorResponseSchema, "description": "Customer already exists"},
    },
)
async def register_customer(
    request: CustomerRequestSchema,
    customer_service: Annotated[CustomerService, Depends(get_customer_service)],
) -> CustomerResponseSchema:
    response = await customer_service.register_customer(
        CustomerRequest(
            nik=request.nik,
            full_name=request.full_name,
            legal_name=request.legal_name,
            birth_place=request.birth_place,
            birth_date=request.birth_date,
            salary=request.salary,
            photo_ktp=request.photo_ktp,
            photo_selfie=request.photo_selfie,
        )
    )

    return CustomerResponseSchema(
        nik=response.nik,
        full_name=response.full_name,
        legal_name=response.legal_name,
        birth_place=response.birth_place,
        birth_date=response.birth_date,
        salary=response.salary,
    )


@customer_router.get(
    "/{nik}",
    response_model=CustomerResponseSchema,
    summary="Get Customer",
)
async def get_customer(
    nik: CustomerNik,
    customer_service: Annotated[CustomerService, Depends(get_customer_service)],
) -> CustomerResponseSchema:
    response = await customer_service.get_customer(nik)

    return CustomerResponseSchema(
        nik=response.nik,
        full_name=response.full_name,
        legal_name=response.legal_name,
        birth_place=response.birth_place,
        birth_date=response.birth_date,
        salary=response.salary,
    )


@customer_router.post(
    "/{nik}/limits",
    response_model=CreditLimitsResponseSchema,
    status_code=201,
    summary="Provision Credit Limits",
    description="""
    Create the approved limit for one or more tenors.

    Tenors that already have a limit are rejected; existing limits only
    change through recorded transactions.
    """,
    responses={
        201: {"description": "Limits created"},
        400: {"model": ErrorResponseSchema, "description": "Invalid limits"},
        409: {"model": ErrorResponseSchema, "description": "Tenor already provisioned"},
    },
)
async def provision_limits(
    nik: CustomerNik,
    request: LimitProvisionRequestSchema,
    customer_service: Annotated[CustomerService, Depends(get_customer_service)],
) -> CreditLimitsResponseSchema:
    response = await customer_service.provision_limits(
        nik,
        [LimitProvision(tenor=p.tenor, limit_amount=p.limit_amount) for p in request.limits],
    )

    return _limits_to_schema(response)


@customer_router.get(
    "/{nik}/limits",
    response_model=CreditLimitsResponseSchema,
    summary="Get Remaining Limits",
)
async def get_limits(
    nik: CustomerNik,
    customer_service: Annotated[CustomerService, Depends(get_customer_service)],
) -> CreditLimitsResponseSchema:
    response = await customer_service.get_limits(nik)

    return _limits_to_schema(response)


@customer_router.get(
    "/{nik}/transactions",
    response_model=TransactionHistoryResponseSchema,
    summary="Get Transaction History",
    description="""
    Retrieve the transactions of a customer.

    Returns transactions ordered by date (newest first).
    """,
)
async def get_transaction_history(
    nik: CustomerNik,
    customer_service: Annotated[CustomerService, Depends(get_customer_service)],
    limit: Annotated[
        int,
        Query(ge=1, le=100, description="Maximum number of transactions to return"),
    ] = 10,
    offset: Annotated[
        int,
        Query(ge=0, description="Number of transactions to skip"),
    ] = 0,
) -> TransactionHistoryResponseSchema:
    response = await customer_service.get_transaction_history(nik, limit, offset)

    return TransactionHistoryResponseSchema(
        customer_nik=response.customer_nik,
        transactions=[
            TransactionResponseSchema(
                contract_number=t.contract_number,
                customer_nik=t.customer_nik,
                tenor=t.tenor,
                otr=t.otr,
                admin_fee=t.admin_fee,
                installment=t.installment,
                interest=t.interest,
                asset_name=t.asset_name,
                created_at=t.created_at,
            )
            for t in response.transactions
        ],
    )

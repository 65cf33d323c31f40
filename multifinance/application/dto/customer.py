"""Data transfer objects for customer onboarding and limit provisioning."""

from dataclasses import dataclass
from datetime import date
from typing import List


@dataclass(frozen=True)
class CustomerRequest:
    """Input data for onboarding a customer."""

    nik: str
    full_name: str
    legal_name: str
    birth_place: str
    birth_date: date
    salary: int
    photo_ktp: str = ""
    photo_selfie: str = ""


@dataclass(frozen=True)
class CustomerResponse:
    """Response data for a customer."""

    nik: str
    full_name: str
    legal_name: str
    birth_place: str
    birth_date: str
    salary: int

    @classmethod
    def from_entity(cls, customer) -> "CustomerResponse":
        return cls(
            nik=customer.nik,
            full_name=customer.full_name,
            legal_name=customer.legal_name,
            birth_place=customer.birth_place,
            birth_date=customer.birth_date.isoformat(),
            salary=customer.salary,
        )


@dataclass(frozen=True)
class LimitProvision:
    """Approved limit for one tenor."""

    tenor: int
    limit_amount: int


@dataclass(frozen=True)
class CreditLimitDTO:
    """Remaining limit for one tenor."""

    tenor: int
    remaining_amount: int


@dataclass(frozen=True)
class CreditLimitsResponse:
    """Response containing every limit of a customer."""

    customer_nik: str
    limits: List[CreditLimitDTO]

    @classmethod
    def from_entities(cls, customer_nik: str, limits: list) -> "CreditLimitsResponse":
        return cls(
            customer_nik=customer_nik,
            limits=[
                CreditLimitDTO(tenor=limit.tenor, remaining_amount=limit.remaining_amount)
                for limit in limits
            ],
        )

"""Data transfer objects for credit transaction operations."""

from dataclasses import dataclass
from typing import List


@dataclass(frozen=True)
class TransactionRequest:
    """Input data for recording a purchase on credit."""

    customer_nik: str
    tenor: int
    otr: int
    admin_fee: int
    installment: int
    interest: int
    asset_name: str

    @property
    def total_amount(self) -> int:
        """Amount charged against the limit: price plus admin fee."""
        return self.otr + self.admin_fee

    def validate(self) -> List[str]:
        errors = []

        if not self.customer_nik or not self.customer_nik.strip():
            errors.append("customer_nik is required")

        if self.tenor <= 0:
            errors.append("tenor must be greater than 0")

        if self.otr <= 0:
            errors.append("otr must be greater than 0")

        if self.admin_fee < 0:
            errors.append("admin_fee cannot be negative")

        if self.installment <= 0:
            errors.append("installment must be greater than 0")

        if self.interest < 0:
            errors.append("interest cannot be negative")

        if not self.asset_name or not self.asset_name.strip():
            errors.append("asset_name is required")

        return errors


@dataclass(frozen=True)
class TransactionResponse:
    """Response data for a recorded transaction."""

    contract_number: str
    customer_nik: str
    tenor: int
    otr: int
    admin_fee: int
    installment: int
    interest: int
    asset_name: str
    created_at: str

    @classmethod
    def from_entity(cls, transaction) -> "TransactionResponse":
        return cls(
            contract_number=transaction.contract_number,
            customer_nik=transaction.customer_nik,
            tenor=transaction.tenor,
            otr=transaction.otr,
            admin_fee=transaction.admin_fee,
            installment=transaction.installment,
            interest=transaction.interest,
            asset_name=transaction.asset_name,
            created_at=transaction.created_at.isoformat(),
        )


@dataclass(frozen=True)
class TransactionHistoryResponse:
    """Response containing a customer's transactions."""

    customer_nik: str
    transactions: List[TransactionResponse]

    @classmethod
    def from_entities(cls, customer_nik: str, transactions: list) -> "TransactionHistoryResponse":
        return cls(
            customer_nik=customer_nik,
            transactions=[TransactionResponse.from_entity(t) for t in transactions],
        )

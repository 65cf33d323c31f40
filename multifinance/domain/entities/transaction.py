"""Transaction entity representing a financed purchase."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class Transaction:
    """
    Immutable record of a purchase financed against a credit limit.

    Attributes:
        contract_number: Unique contract identifier
        customer_nik: Customer who made the purchase
        tenor: Tenor whose limit the purchase was drawn from
        otr: On-the-road price of the asset
        admin_fee: Administration fee charged on top of the price
        installment: Monthly installment amount
        interest: Interest portion of the financing
        asset_name: Description of the financed asset
        created_at: When the transaction was recorded
    """

    contract_number: str
    customer_nik: str
    tenor: int
    otr: int
    admin_fee: int
    installment: int
    interest: int
    asset_name: str
    created_at: datetime

    @property
    def total_amount(self) -> int:
        """Amount charged against the credit limit."""
        return self.otr + self.admin_fee

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "contract_number": self.contract_number,
            "customer_nik": self.customer_nik,
            "tenor": self.tenor,
            "otr": self.otr,
            "admin_fee": self.admin_fee,
            "installment": self.installment,
            "interest": self.interest,
            "asset_name": self.asset_name,
            "created_at": self.created_at.isoformat(),
        }

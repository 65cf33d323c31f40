"""Credit limit entity: remaining spendable amount per customer and tenor."""

from dataclasses import dataclass, replace


@dataclass(frozen=True)
class CreditLimit:
    """
    Remaining limit of a customer for one tenor.

    Amounts are integers in the smallest currency unit. A missing row
    means the customer is not approved for the tenor, which is not the
    same as a zero remaining amount.

    Attributes:
        customer_nik: Owner of the limit
        tenor: Repayment term in months
        remaining_amount: Unspent portion of the approved limit (>= 0)
        version: Row version, bumped on every committed update
    """

    customer_nik: str
    tenor: int
    remaining_amount: int
    version: int = 1

    def __post_init__(self):
        if self.tenor <= 0:
            raise ValueError("tenor must be greater than 0")
        if self.remaining_amount < 0:
            raise ValueError("remaining_amount cannot be negative")

    def can_cover(self, amount: int) -> bool:
        """Check whether the remaining limit covers the given amount."""
        return amount <= self.remaining_amount

    def deduct(self, amount: int) -> "CreditLimit":
        """Return a copy with the amount deducted."""
        return replace(self, remaining_amount=self.remaining_amount - amount)

    def to_dict(self) -> dict:
        return {
            "customer_nik": self.customer_nik,
            "tenor": self.tenor,
            "remaining_amount": self.remaining_amount,
        }

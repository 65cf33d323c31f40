"""Customer entity representing an onboarded borrower."""

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class Customer:
    """
    Identity record of a financing customer.

    Keyed by the national identity number (NIK). Created by the onboarding
    flow and never changed by the transaction engine, which only checks
    that the customer exists.
    """

    nik: str
    full_name: str
    legal_name: str
    birth_place: str
    birth_date: date
    salary: int
    photo_ktp: str = ""
    photo_selfie: str = ""

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "nik": self.nik,
            "full_name": self.full_name,
            "legal_name": self.legal_name,
            "birth_place": self.birth_place,
            "birth_date": self.birth_date.isoformat(),
            "salary": self.salary,
            "photo_ktp": self.photo_ktp,
            "photo_selfie": self.photo_selfie,
        }

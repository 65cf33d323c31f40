"""Customer and credit limit Pydantic schemas."""

from datetime import date

from pydantic import BaseModel, ConfigDict, Field, field_validator


class CustomerRequestSchema(BaseModel):
    """Schema for POST /api/v1/customers request body."""

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "nik": "3201011201900001",
                    "full_name": "Budi Santoso",
                    "legal_name": "Budi Santoso",
                    "birth_place": "Bandung",
                    "birth_date": "1990-01-12",
                    "salary": 8000000,
                    "photo_ktp": "ktp/3201011201900001.jpg",
                    "photo_selfie": "selfie/3201011201900001.jpg",
                }
            ]
        }
    )
    nik: str = Field(..., min_length=1, max_length=32, description="National identity number")
    full_name: str = Field(..., min_length=1, max_length=255)
    legal_name: str = Field(..., min_length=1, max_length=255)
    birth_place: str = Field(..., min_length=1, max_length=255)
    birth_date: date = Field(..., description="Date of birth (YYYY-MM-DD)")
    salary: int = Field(..., ge=0, description="Monthly salary")
    photo_ktp: str = Field("", description="Reference to the identity card photo")
    photo_selfie: str = Field("", description="Reference to the selfie photo")

    @field_validator("nik")
    @classmethod
    def validate_nik(cls, v: str) -> str:
        """Ensure nik is not just whitespace."""
        if not v.strip():
            raise ValueError("nik cannot be empty or whitespace")
        return v.strip()


class CustomerResponseSchema(BaseModel):
    """Schema for a customer in responses."""

    nik: str
    full_name: str
    legal_name: str
    birth_place: str
    birth_date: str = Field(..., description="Date of birth (YYYY-MM-DD)")
    salary: int


class LimitProvisionSchema(BaseModel):
    """Approved limit for one tenor."""

    tenor: int = Field(..., gt=0, description="Tenor in months", examples=[6])
    limit_amount: int = Field(..., ge=0, description="Approved limit", examples=[10000000])


class LimitProvisionRequestSchema(BaseModel):
    """Schema for POST /api/v1/customers/{nik}/limits request body."""

    limits: list[LimitProvisionSchema] = Field(
        ...,
        min_length=1,
        description="Limits to create, one per tenor",
    )


class CreditLimitSchema(BaseModel):
    """Remaining limit for one tenor."""

    tenor: int
    remaining_amount: int = Field(..., ge=0)


class CreditLimitsResponseSchema(BaseModel):
    """Schema for GET /api/v1/customers/{nik}/limits response."""

    customer_nik: str
    limits: list[CreditLimitSchema]

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "customer_nik": "3201011201900001",
                    "limits": [
                        {"tenor": 1, "remaining_amount": 100000},
                        {"tenor": 3, "remaining_amount": 500000},
                        {"tenor": 6, "remaining_amount": 8950000},
                    ],
                }
            ]
        }
    }

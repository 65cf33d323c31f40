"""Transaction-related Pydantic schemas."""

from pydantic import BaseModel, ConfigDict, Field, field_validator


class TransactionRequestSchema(BaseModel):
    """Schema for POST /api/v1/transactions request body."""

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "customer_nik": "3201011201900001",
                    "tenor": 6,
                    "otr": 1000000,
                    "admin_fee": 50000,
                    "installment": 180000,
                    "interest": 30000,
                    "asset_name": "Honda Beat",
                }
            ]
        }
    )
    customer_nik: str = Field(
        ...,
        min_length=1,
        max_length=32,
        description="National identity number of the customer",
        examples=["3201011201900001"],
    )
    tenor: int = Field(
        ...,
        gt=0,
        description="Repayment term in months",
        examples=[6],
    )
    otr: int = Field(
        ...,
        gt=0,
        description="On-the-road price of the asset",
        examples=[1000000],
    )
    admin_fee: int = Field(
        ...,
        ge=0,
        description="Administration fee",
        examples=[50000],
    )
    installment: int = Field(
        ...,
        gt=0,
        description="Monthly installment amount",
        examples=[180000],
    )
    interest: int = Field(
        ...,
        ge=0,
        description="Interest portion of the financing",
        examples=[30000],
    )
    asset_name: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Description of the financed asset",
        examples=["Honda Beat"],
    )

    @field_validator("customer_nik", "asset_name")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        """Ensure text fields are not just whitespace."""
        if not v.strip():
            raise ValueError("cannot be empty or whitespace")
        return v.strip()


class TransactionResponseSchema(BaseModel):
    """Schema for a recorded transaction."""

    contract_number: str = Field(
        ...,
        description="Unique contract identifier",
        examples=["32010112-20261019093015123456-4F2A"],
    )
    customer_nik: str = Field(..., description="Customer who made the purchase")
    tenor: int = Field(..., gt=0, description="Tenor the limit was drawn from")
    otr: int = Field(..., gt=0, description="On-the-road price of the asset")
    admin_fee: int = Field(..., ge=0, description="Administration fee")
    installment: int = Field(..., gt=0, description="Monthly installment amount")
    interest: int = Field(..., ge=0, description="Interest portion")
    asset_name: str = Field(..., description="Financed asset")
    created_at: str = Field(
        ...,
        description="ISO 8601 timestamp of the transaction",
    )


class TransactionHistoryResponseSchema(BaseModel):
    """Schema for GET /api/v1/customers/{nik}/transactions response."""

    customer_nik: str = Field(
        ...,
        description="The customer's NIK",
    )
    transactions: list[TransactionResponseSchema] = Field(
        ...,
        description="Transactions, newest first",
    )

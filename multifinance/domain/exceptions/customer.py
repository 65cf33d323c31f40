"""Customer and limit provisioning exceptions."""

from .base import DomainException


class CustomerAlreadyExistsException(DomainException):
    """Raised when onboarding a customer whose NIK is already registered."""

    def __init__(self, customer_nik: str):
        super().__init__(
            message=f"Customer already exists: {customer_nik}",
            code="CUSTOMER_ALREADY_EXISTS",
        )
        self.customer_nik = customer_nik


class LimitAlreadyProvisionedException(DomainException):
    """Raised when provisioning a tenor that already has a limit row."""

    def __init__(self, customer_nik: str, tenor: int):
        super().__init__(
            message=f"Credit limit for tenor {tenor} is already provisioned",
            code="LIMIT_ALREADY_PROVISIONED",
        )
        self.customer_nik = customer_nik
        self.tenor = tenor


class TransactionNotFoundException(DomainException):
    """Raised when a transaction cannot be found."""

    def __init__(self, contract_number: str):
        super().__init__(
            message=f"Transaction not found: {contract_number}",
            code="TRANSACTION_NOT_FOUND",
        )
        self.contract_number = contract_number


class InvalidRequestException(DomainException):
    """Raised when a request fails business-level validation."""

    def __init__(self, message: str):
        super().__init__(
            message=message,
            code="INVALID_REQUEST",
        )

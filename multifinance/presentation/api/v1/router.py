from fastapi import APIRouter

from .customer import customer_router
from .transaction import transaction_router

router = APIRouter()

router.include_router(transaction_router, tags=["Transactions"])
router.include_router(customer_router, tags=["Customers"])

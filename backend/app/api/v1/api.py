from fastapi import APIRouter

from backend.app.api.v1.endpoints import cash_registers, products, sales, users

api_router = APIRouter(prefix="/api/v1")

api_router.include_router(users.router, prefix="/users", tags=["users"])
api_router.include_router(products.router, prefix="/products", tags=["products"])
api_router.include_router(cash_registers.router, prefix="/cash-registers", tags=["cash-registers"])
api_router.include_router(sales.router, prefix="/sales", tags=["sales"])

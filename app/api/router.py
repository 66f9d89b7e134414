from fastapi import APIRouter
from app.api.routes import accounts, health

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["Health"])
api_router.include_router(accounts.router, prefix="/accounts", tags=["Accounts"])

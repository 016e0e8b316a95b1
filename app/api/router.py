"""API Router"""

from fastapi import APIRouter

from app.api.endpoints import auth, fines, licenses, payments

api_router = APIRouter()

api_router.include_router(auth.router, prefix="/auth", tags=["Authentication"])
api_router.include_router(fines.router, prefix="/fines", tags=["Fines"])
api_router.include_router(licenses.router, prefix="/licenses", tags=["Licenses"])
api_router.include_router(payments.router, prefix="/payments", tags=["Payments"])

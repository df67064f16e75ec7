# src/petcare_api/api/v1/router.py
from fastapi import APIRouter

from petcare_api.api.v1 import amazon

api_router = APIRouter(prefix="/api")
api_router.include_router(amazon.router)

from fastapi import APIRouter

# Every router module registers its endpoints on this shared router
api_router = APIRouter(prefix="/api")

# promptshare/api/routes/root_routes.py
from fastapi import APIRouter

router = APIRouter()


@router.get("/")
async def read_root():
    return {"message": "promptshare API", "docs": "/docs"}


@router.get("/api/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}

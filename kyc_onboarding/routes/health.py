# This project was developed with assistance from AI tools.
"""Health check route."""

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from ..services.storage import StorageService, get_storage_service

router = APIRouter()


class ServiceStatus(BaseModel):
    name: str
    status: str


@router.get("/", response_model=list[ServiceStatus])
async def health(storage: StorageService = Depends(get_storage_service)) -> list[ServiceStatus]:
    """Report API liveness and whether the uploads directory is writable."""
    return [
        ServiceStatus(name="API", status="healthy"),
        ServiceStatus(
            name="Storage",
            status="healthy" if storage.is_writable() else "unhealthy",
        ),
    ]

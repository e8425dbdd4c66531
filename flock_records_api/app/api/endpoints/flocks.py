"""
Flock read endpoints.

``/all-data`` returns the whole document for the administrative
overview; ``/data/{flock_id}`` returns one flock for a detail view.
The identifier is a path parameter so IDs containing ``/`` work too.
"""

from typing import List

from fastapi import APIRouter, HTTPException, status

from flock_records_api.app.schemas.flock import Flock
from flock_records_api.app.services.record_service import RecordService

router = APIRouter()


@router.get("/all-data", response_model=List[Flock])
async def list_flocks() -> List[Flock]:
    return await RecordService.list_flocks()


@router.get("/data/{flock_id:path}", response_model=Flock)
async def get_flock(flock_id: str) -> Flock:
    """Retrieve a single flock with all of its daily records.

    Returns HTTP 404 if the flock is not found.
    """
    flock = await RecordService.get_flock(flock_id)
    if flock is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Flock {flock_id} not found")
    return flock

"""
Daily record endpoints.

These routes let a breeder save a day's observations and let the
administrative view correct or remove them.  Each route hands its body
to ``RecordService`` and maps the service errors to HTTP status codes:
400 for invalid input, 404 for an unknown flock or day and 500 when the
data file cannot be written.
"""

from fastapi import APIRouter, HTTPException, status

from flock_records_api.app.core.exceptions import (
    RecordNotFoundError,
    RecordValidationError,
    StorageError,
)
from flock_records_api.app.schemas.flock import (
    MessageResponse,
    RecordDelete,
    RecordResponse,
    RecordSave,
    RecordUpdate,
)
from flock_records_api.app.services.record_service import RecordService

router = APIRouter()


@router.post("/save", response_model=RecordResponse)
async def save_record(record_in: RecordSave) -> RecordResponse:
    """Create or replace the record for a flock and day.

    The first save for an unknown ``flockId`` creates the flock and must
    carry ``breederName`` and a positive ``initialChickCount``.
    """
    try:
        return await RecordService.save_record(record_in)
    except RecordValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except StorageError as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))


@router.put("/update", response_model=RecordResponse)
async def update_record(record_in: RecordUpdate) -> RecordResponse:
    """Change selected observation fields of an existing record."""
    try:
        return await RecordService.update_record(record_in)
    except RecordValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except RecordNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except StorageError as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))


@router.delete("/delete", response_model=MessageResponse)
async def delete_record(record_in: RecordDelete) -> MessageResponse:
    """Remove the record for a flock and day.

    ``flockId`` and ``day`` are read from the JSON body.
    """
    try:
        return await RecordService.delete_record(record_in)
    except RecordValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except RecordNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except StorageError as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))

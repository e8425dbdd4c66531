"""
Business logic for daily flock records.

Every operation loads the whole flock document once, validates the
request before touching anything, applies its change through a
``FlockRepository`` and writes the document back at most once.  A
request that fails validation or refers to a missing flock or day
leaves the stored document exactly as it was.

A new flock needs a breeder name and a positive ``initialChickCount``.
Later saves for the same flock may omit the breeder name as long as one
is already on record.
"""

import logging
from datetime import datetime
from typing import Callable, List, Optional

from ..core.exceptions import RecordNotFoundError, RecordValidationError
from ..core.storage import get_store
from ..schemas.flock import (
    DailyRecord,
    Flock,
    MessageResponse,
    RecordDelete,
    RecordResponse,
    RecordSave,
    RecordUpdate,
)
from .flock_repository import PATCHABLE_FIELDS, FlockRepository


class RecordService:
    """Service for saving, listing, updating and deleting daily records."""

    # Source of "now" for timestamps; tests replace it with a fixed clock.
    clock: Optional[Callable[[], datetime]] = None

    @classmethod
    def _repository(cls, flocks: List[Flock]) -> FlockRepository:
        return FlockRepository(flocks, clock=cls.clock)

    @staticmethod
    def _require_key(flock_id: Optional[str], day: Optional[int]) -> None:
        if not flock_id or not flock_id.strip():
            raise RecordValidationError("flockId is required")
        if day is None:
            raise RecordValidationError("day is required")

    @classmethod
    async def save_record(cls, data: RecordSave) -> RecordResponse:
        """Create or replace the record for ``data.day`` in ``data.flock_id``.

        The flock is created on first use.  The observation fields of the
        saved record are exactly the submitted ones; ``initialChickCount``
        is kept on the flock only.
        """
        logger = logging.getLogger(__name__)
        logger.debug("Save request received: %s", data.model_dump(by_alias=True, exclude_unset=True))
        cls._require_key(data.flock_id, data.day)
        breeder_name = (data.breeder_name or "").strip()

        store = get_store()
        repo = cls._repository(store.load())
        existing = repo.find_flock(data.flock_id)
        if existing is None:
            if not breeder_name:
                raise RecordValidationError("breederName is required")
            if not data.initial_chick_count or data.initial_chick_count <= 0:
                raise RecordValidationError(
                    "initialChickCount must be a positive number when a flock is first saved"
                )
        elif not breeder_name and not existing.breeder_name:
            raise RecordValidationError("breederName is required")

        flock = repo.ensure_flock(
            data.flock_id,
            breeder_name=breeder_name or None,
            initial_chick_count=data.initial_chick_count,
        )
        record = DailyRecord(day=data.day, **{name: getattr(data, name) for name in PATCHABLE_FIELDS})
        saved = repo.upsert_daily_record(flock, record)
        store.save(repo.flocks)
        logger.info("Saved day %s of flock %s", saved.day, flock.flock_id)
        return RecordResponse(
            message=f"Saved day {saved.day} for breeder {flock.breeder_name}.",
            record=saved,
        )

    @classmethod
    async def list_flocks(cls) -> List[Flock]:
        """Return every stored flock, unfiltered."""
        return get_store().load()

    @classmethod
    async def get_flock(cls, flock_id: str) -> Optional[Flock]:
        """Return a single flock with all of its records, or ``None``."""
        return cls._repository(get_store().load()).find_flock(flock_id)

    @classmethod
    async def update_record(cls, data: RecordUpdate) -> RecordResponse:
        """Merge the supplied observation fields into an existing record.

        Raises ``RecordNotFoundError`` when the flock or the day does not
        exist.  A non-empty ``breederName`` also renames the flock's
        breeder.
        """
        logger = logging.getLogger(__name__)
        cls._require_key(data.flock_id, data.day)

        store = get_store()
        repo = cls._repository(store.load())
        flock = repo.find_flock(data.flock_id)
        if flock is None:
            raise RecordNotFoundError(f"Flock {data.flock_id} not found", kind="flock")

        patch = data.model_dump(include=set(PATCHABLE_FIELDS), exclude_unset=True)
        updated = repo.update_daily_record(flock, data.day, patch)
        if updated is None:
            raise RecordNotFoundError(f"No record for day {data.day} in flock {data.flock_id}")
        breeder_name = (data.breeder_name or "").strip()
        if breeder_name:
            flock.breeder_name = breeder_name

        store.save(repo.flocks)
        logger.info("Updated day %s of flock %s", data.day, data.flock_id)
        return RecordResponse(message=f"Updated day {data.day} of flock {data.flock_id}.", record=updated)

    @classmethod
    async def delete_record(cls, data: RecordDelete) -> MessageResponse:
        """Delete the record for ``data.day`` and recompute the flock's age."""
        logger = logging.getLogger(__name__)
        cls._require_key(data.flock_id, data.day)

        store = get_store()
        repo = cls._repository(store.load())
        flock = repo.find_flock(data.flock_id)
        if flock is None:
            raise RecordNotFoundError(f"Flock {data.flock_id} not found", kind="flock")
        if not repo.delete_daily_record(flock, data.day):
            raise RecordNotFoundError(f"No record for day {data.day} in flock {data.flock_id}")

        store.save(repo.flocks)
        logger.info("Deleted day %s from flock %s", data.day, data.flock_id)
        return MessageResponse(message=f"Deleted day {data.day} from flock {data.flock_id}.")

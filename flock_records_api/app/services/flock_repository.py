"""
In-memory operations over the list of flocks.

A ``FlockRepository`` wraps the list returned by a single
``DocumentStore.load`` call.  It never touches the disk itself; the
caller persists ``repository.flocks`` once all mutations succeed.

After every insert or delete the flock's ``daily_records`` are sorted by
``day`` and ``current_age`` equals the highest recorded day (0 when
there are no records).
"""

import logging
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional

from ..schemas.flock import DailyRecord, Flock

logger = logging.getLogger(__name__)

# Fields a caller may change on an existing daily record.
PATCHABLE_FIELDS = ("mortality", "feed_kg", "avg_weight", "water_intake", "notes")


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class FlockRepository:
    """Bookkeeping for flocks loaded from the document store."""

    def __init__(self, flocks: List[Flock], clock: Optional[Callable[[], datetime]] = None) -> None:
        self.flocks = flocks
        self.clock = clock or utc_now

    def _timestamp(self) -> str:
        return self.clock().isoformat()

    def find_flock(self, flock_id: str) -> Optional[Flock]:
        return next((f for f in self.flocks if f.flock_id == flock_id), None)

    def ensure_flock(
        self,
        flock_id: str,
        breeder_name: Optional[str] = None,
        initial_chick_count: Optional[int] = None,
        start_date: Optional[str] = None,
    ) -> Flock:
        """Return the flock ``flock_id``, creating it when absent.

        On an existing flock a non-empty ``breeder_name`` replaces the
        stored one and ``initial_chick_count`` is only filled in when the
        stored value is missing or zero.  Callers must reject creation
        without a positive ``initial_chick_count`` before calling this.
        """
        flock = self.find_flock(flock_id)
        if flock is None:
            flock = Flock(
                flock_id=flock_id,
                breeder_name=breeder_name,
                initial_chick_count=initial_chick_count,
                start_date=start_date or self.clock().date().isoformat(),
                current_age=0,
                daily_records=[],
            )
            self.flocks.append(flock)
            logger.info("Created flock %s for breeder %s", flock_id, breeder_name)
            return flock

        if breeder_name:
            flock.breeder_name = breeder_name
        if initial_chick_count and initial_chick_count > 0 and not flock.initial_chick_count:
            flock.initial_chick_count = initial_chick_count
        return flock

    @staticmethod
    def _find_index(flock: Flock, day: int) -> Optional[int]:
        return next((i for i, r in enumerate(flock.daily_records) if r.day == day), None)

    @staticmethod
    def _reorder(flock: Flock) -> None:
        flock.daily_records.sort(key=lambda r: r.day)
        flock.current_age = max((r.day for r in flock.daily_records), default=0)

    def upsert_daily_record(self, flock: Flock, record: DailyRecord) -> DailyRecord:
        """Insert or replace the record for ``record.day``.

        A replaced record keeps its original ``created_at``; every other
        field comes from ``record``.  ``updated_at`` is set to now.
        """
        now = self._timestamp()
        index = self._find_index(flock, record.day)
        if index is not None:
            saved = record.model_copy(
                update={"created_at": flock.daily_records[index].created_at, "updated_at": now}
            )
            flock.daily_records[index] = saved
        else:
            saved = record.model_copy(update={"created_at": now, "updated_at": now})
            flock.daily_records.append(saved)
        self._reorder(flock)
        return saved

    def delete_daily_record(self, flock: Flock, day: int) -> bool:
        """Remove the record for ``day``.  Returns ``False`` if there was none."""
        index = self._find_index(flock, day)
        if index is None:
            return False
        previous_age = flock.current_age
        del flock.daily_records[index]
        if day == previous_age:
            flock.current_age = max((r.day for r in flock.daily_records), default=0)
        return True

    def update_daily_record(self, flock: Flock, day: int, patch: Dict[str, Any]) -> Optional[DailyRecord]:
        """Merge whitelisted ``patch`` fields into the record for ``day``.

        Returns ``None`` when the flock has no record for that day.
        ``day`` and ``created_at`` are never changed.
        """
        index = self._find_index(flock, day)
        if index is None:
            return None
        changes = {k: v for k, v in patch.items() if k in PATCHABLE_FIELDS}
        changes["updated_at"] = self._timestamp()
        updated = flock.daily_records[index].model_copy(update=changes)
        flock.daily_records[index] = updated
        return updated

"""
Pydantic models for flocks and their daily records.

``Flock`` and ``DailyRecord`` describe the persisted document.  The
``Record*`` request models accept every field as optional: presence
rules live in ``RecordService`` so that they apply to any caller, not
only to HTTP requests.  Unknown fields in a request are ignored, which
keeps stray keys out of the stored records.
"""

from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, StrictFloat, StrictInt
from pydantic.alias_generators import to_camel

# Observations are stored exactly as sent: 2 stays 2, 1.5 stays 1.5.  Strict
# types keep booleans and numeric strings out.
Number = Union[StrictInt, StrictFloat]


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class DailyRecord(CamelModel):
    """One day of observations for a flock."""

    day: StrictInt = Field(..., ge=0, description="Day number; unique within the flock")
    mortality: Optional[Number] = None
    feed_kg: Optional[Number] = None
    avg_weight: Optional[Number] = None
    water_intake: Optional[Number] = None
    notes: Optional[str] = None
    created_at: Optional[str] = Field(None, description="Set when the record is first saved")
    updated_at: Optional[str] = Field(None, description="Set on every write to the record")


class Flock(CamelModel):
    """A flock and its ordered daily records."""

    flock_id: str
    breeder_name: Optional[str] = None
    initial_chick_count: Optional[StrictInt] = None
    start_date: Optional[str] = None
    current_age: int = 0
    daily_records: List[DailyRecord] = Field(default_factory=list)


class RecordSave(CamelModel):
    """Body of ``POST /api/records/save``."""

    flock_id: Optional[str] = Field(None, examples=["F1"])
    day: Optional[StrictInt] = Field(None, ge=0, examples=[1])
    breeder_name: Optional[str] = Field(None, examples=["Ali"])
    initial_chick_count: Optional[StrictInt] = Field(
        None, description="Required only when the flock does not exist yet", examples=[500]
    )
    mortality: Optional[Number] = None
    feed_kg: Optional[Number] = None
    avg_weight: Optional[Number] = None
    water_intake: Optional[Number] = None
    notes: Optional[str] = None


class RecordUpdate(CamelModel):
    """Body of ``PUT /api/records/update``.

    Only the observation fields that are present in the request are
    changed.
    """

    flock_id: Optional[str] = None
    day: Optional[StrictInt] = Field(None, ge=0)
    breeder_name: Optional[str] = None
    mortality: Optional[Number] = None
    feed_kg: Optional[Number] = None
    avg_weight: Optional[Number] = None
    water_intake: Optional[Number] = None
    notes: Optional[str] = None


class RecordDelete(CamelModel):
    """Body of ``DELETE /api/records/delete``."""

    flock_id: Optional[str] = None
    day: Optional[StrictInt] = Field(None, ge=0)


class RecordResponse(BaseModel):
    message: str
    record: DailyRecord


class MessageResponse(BaseModel):
    message: str

# Role: Typed shape of the structured payload attached to assistant messages (quick replies, rich media,
# day itinerary). Validated at the serialization boundary so storage/transport get a lossless JSON object.

from __future__ import annotations

from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, ValidationError, model_validator

from party_planner.core.errors import InvalidMetadata


class _Strict(BaseModel):
    model_config = ConfigDict(extra="forbid")


class ActivityCard(_Strict):
    name: str
    description: str
    cost: Optional[Union[int, float]] = None
    image_url: Optional[str] = None


class ItineraryStop(_Strict):
    time: str
    activity: str
    location: str
    cost: Optional[Union[int, float]] = None


class DayItinerary(_Strict):
    day: int
    activities: List[ItineraryStop]


class RichMedia(_Strict):
    images: Optional[List[str]] = None
    activities: Optional[List[ActivityCard]] = None
    itinerary: Optional[DayItinerary] = None


class MessageMetadata(_Strict):
    quick_replies: Optional[List[str]] = None
    rich_media: Optional[RichMedia] = None

    @model_validator(mode="after")
    def _check_quick_replies(self):
        if self.quick_replies is not None and any(not r.strip() for r in self.quick_replies):
            raise ValueError("quick_replies must not contain blank labels")
        return self

    def to_json(self) -> str:
        # Key line: unset parts are omitted rather than written as null.
        return self.model_dump_json(exclude_none=True)

    @classmethod
    def from_json(cls, raw: Optional[str]) -> Optional["MessageMetadata"]:
        if raw is None or not raw.strip():
            return None
        try:
            return cls.model_validate_json(raw)
        except ValidationError as e:
            raise InvalidMetadata(str(e)) from e

"""Schemas for events, their skill requirements and volunteer assignments"""

import enum
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from shiftpilot.schemas.volunteers import ProficiencyLevel


class _CaseInsensitiveEnum(str, enum.Enum):
    """String enum that accepts any casing plus a table of legacy aliases"""

    @classmethod
    def _aliases(cls) -> dict[str, str]:
        return {}

    @classmethod
    def _missing_(cls, value: object):
        if not isinstance(value, str):
            return None
        key = value.strip().upper().replace("-", "_")
        key = cls._aliases().get(key, key)
        return cls.__members__.get(key)

    @classmethod
    def parse(cls, value: Any):
        """Parse a member, returning None for unrecognized values"""
        if value is None:
            return None
        try:
            return cls(value)
        except ValueError:
            return None


class UrgencyLevel(_CaseInsensitiveEnum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    CRITICAL = "CRITICAL"

    @classmethod
    def _aliases(cls) -> dict[str, str]:
        return {"NORMAL": "MEDIUM", "URGENT": "CRITICAL"}

    @property
    def priority(self) -> int:
        return {"LOW": 1, "MEDIUM": 2, "HIGH": 3, "CRITICAL": 4}[self.value]


class EventStatus(_CaseInsensitiveEnum):
    DRAFT = "DRAFT"
    PUBLISHED = "PUBLISHED"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


class AssignmentStatus(_CaseInsensitiveEnum):
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    CANCELLED = "CANCELLED"
    COMPLETED = "COMPLETED"


class SkillRequirement(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    skill_id: str
    min_level: ProficiencyLevel | None = None
    is_required: bool = True
    skill_name: str | None = None

    @field_validator("min_level", mode="before")
    @classmethod
    def parse_min_level(cls, v: Any) -> ProficiencyLevel | None:
        return ProficiencyLevel.parse(v)


class Event(BaseModel):
    """Read-only view of an event used for scoring"""
    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str = ""
    latitude: float | None = Field(default=None, ge=-90, le=90)
    longitude: float | None = Field(default=None, ge=-180, le=180)
    start_date: datetime
    end_date: datetime
    urgency_level: UrgencyLevel | None = UrgencyLevel.MEDIUM
    category: str | None = None
    status: EventStatus = EventStatus.PUBLISHED
    max_volunteers: int = Field(default=1, ge=0)
    current_volunteers: int = Field(default=0, ge=0)
    requirements: list[SkillRequirement] = Field(default_factory=list)

    @field_validator("urgency_level", mode="before")
    @classmethod
    def parse_urgency(cls, v: Any) -> UrgencyLevel | None:
        return UrgencyLevel.parse(v)

    @model_validator(mode="after")
    def check_dates(self) -> "Event":
        if self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self

    @property
    def coordinates(self) -> tuple[float, float] | None:
        if self.latitude is None or self.longitude is None:
            return None
        return self.latitude, self.longitude

    @property
    def available_slots(self) -> int:
        return max(0, self.max_volunteers - self.current_volunteers)

    @property
    def is_at_capacity(self) -> bool:
        return self.current_volunteers >= self.max_volunteers

    @property
    def needs_volunteers(self) -> bool:
        return self.status == EventStatus.PUBLISHED and not self.is_at_capacity


class EventSummary(BaseModel):
    """Compact event representation embedded in match responses"""
    id: str
    title: str
    start_date: datetime
    category: str | None = None
    urgency_level: UrgencyLevel | None = None
    max_volunteers: int
    current_volunteers: int

    @classmethod
    def from_event(cls, event: Event) -> "EventSummary":
        return cls(
            id=event.id,
            title=event.title,
            start_date=event.start_date,
            category=event.category,
            urgency_level=event.urgency_level,
            max_volunteers=event.max_volunteers,
            current_volunteers=event.current_volunteers,
        )


class AssignmentCreate(BaseModel):
    """Payload handed to the data source when assigning a volunteer"""
    event_id: str
    volunteer_id: str
    status: AssignmentStatus = AssignmentStatus.PENDING
    match_score: int = Field(default=0, ge=0, le=100)
    match_quality: str | None = None
    notes: str = ""


class Assignment(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    event_id: str
    volunteer_id: str
    status: AssignmentStatus = AssignmentStatus.PENDING
    match_score: int = 0
    notes: str = ""
    assigned_at: datetime | None = None

    @property
    def is_active(self) -> bool:
        return self.status != AssignmentStatus.CANCELLED

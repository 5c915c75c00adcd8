"""Schemas describing volunteers and their matching-relevant profile data"""

import enum
from datetime import date, datetime, time
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from shiftpilot.utils.geographic import extract_coordinates
from shiftpilot.utils.scheduling import normalize_day_name, time_to_minutes


class ProficiencyLevel(str, enum.Enum):
    """Skill proficiency, ordered by rank"""
    BEGINNER = "BEGINNER"
    INTERMEDIATE = "INTERMEDIATE"
    ADVANCED = "ADVANCED"
    EXPERT = "EXPERT"

    @property
    def rank(self) -> int:
        return _PROFICIENCY_RANKS[self]

    @classmethod
    def _missing_(cls, value: object):
        # Historic records store both "advanced" and "ADVANCED"
        if isinstance(value, str):
            return cls.__members__.get(value.strip().upper())
        return None

    @classmethod
    def parse(cls, value: Any) -> "ProficiencyLevel | None":
        """Case-insensitive parse; None for anything unrecognized"""
        if value is None:
            return None
        try:
            return cls(value)
        except ValueError:
            return None


_PROFICIENCY_RANKS = {
    ProficiencyLevel.BEGINNER: 1,
    ProficiencyLevel.INTERMEDIATE: 2,
    ProficiencyLevel.ADVANCED: 3,
    ProficiencyLevel.EXPERT: 4,
}


def proficiency_rank(value: Any, default: int = 1) -> int:
    """Integer rank of a proficiency value, or default when unrecognized"""
    level = ProficiencyLevel.parse(value)
    return level.rank if level else default


class SkillEntry(BaseModel):
    """A skill held by a volunteer"""
    model_config = ConfigDict(from_attributes=True)

    skill_id: str
    proficiency: ProficiencyLevel | None = None

    @field_validator("proficiency", mode="before")
    @classmethod
    def parse_proficiency(cls, v: Any) -> ProficiencyLevel | None:
        return ProficiencyLevel.parse(v)


class AvailabilitySlot(BaseModel):
    """A window of time a volunteer can work, recurring weekly or on one date"""
    model_config = ConfigDict(from_attributes=True)

    day_of_week: str | None = None
    specific_date: date | None = None
    start_time: str
    end_time: str
    is_recurring: bool = True

    @field_validator("day_of_week", mode="before")
    @classmethod
    def normalize_day(cls, v: Any) -> str | None:
        if v is None:
            return None
        day = normalize_day_name(v)
        if day is None:
            raise ValueError(f"Unknown day of week: {v!r}")
        return day

    @field_validator("specific_date", mode="before")
    @classmethod
    def coerce_specific_date(cls, v: Any) -> Any:
        if isinstance(v, datetime):
            return v.date()
        if isinstance(v, str) and "T" in v:
            return v.split("T", 1)[0]
        return v

    @field_validator("start_time", "end_time", mode="before")
    @classmethod
    def validate_time(cls, v: Any) -> str:
        if isinstance(v, time):
            return v.strftime("%H:%M")
        if not isinstance(v, str):
            raise ValueError(f"Time must be an 'HH:MM' string, got {v!r}")
        time_to_minutes(v)
        return v


class VolunteerPreferences(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    max_distance: float | None = Field(default=None, ge=0)
    causes: list[str] = Field(default_factory=list)
    preferred_time_slots: list[str] = Field(default_factory=list)
    weekdays_only: bool = False

    @field_validator("preferred_time_slots", mode="before")
    @classmethod
    def lowercase_slots(cls, v: Any) -> Any:
        if isinstance(v, list):
            return [slot.lower() if isinstance(slot, str) else slot for slot in v]
        return v


class VolunteerProfile(BaseModel):
    """Read-only view of a volunteer profile used for scoring"""
    model_config = ConfigDict(from_attributes=True)

    first_name: str | None = None
    last_name: str | None = None
    phone: str | None = None
    address: str | None = None
    latitude: float | None = Field(default=None, ge=-90, le=90)
    longitude: float | None = Field(default=None, ge=-180, le=180)
    skills: list[SkillEntry] = Field(default_factory=list)
    availability: list[AvailabilitySlot] = Field(default_factory=list)
    preferences: VolunteerPreferences | None = None

    @model_validator(mode="before")
    @classmethod
    def coordinates_from_location(cls, data: Any) -> Any:
        """Fill latitude/longitude from a free-form 'location' mapping"""
        if isinstance(data, dict) and data.get("latitude") is None:
            coords = extract_coordinates(data.get("location"))
            if coords:
                data = {**data, "latitude": coords[0], "longitude": coords[1]}
        return data

    @property
    def coordinates(self) -> tuple[float, float] | None:
        if self.latitude is None or self.longitude is None:
            return None
        return self.latitude, self.longitude

    @property
    def full_name(self) -> str:
        return " ".join(part for part in (self.first_name, self.last_name) if part)

    def skill_ids(self) -> set[str]:
        return {skill.skill_id for skill in self.skills}

    def find_skill(self, skill_id: str) -> SkillEntry | None:
        return next((skill for skill in self.skills if skill.skill_id == skill_id), None)


class Volunteer(BaseModel):
    """Volunteer account with its profile"""
    model_config = ConfigDict(from_attributes=True)

    id: str
    email: str | None = None
    role: str = "volunteer"
    created_at: datetime | None = None
    profile: VolunteerProfile = Field(default_factory=VolunteerProfile)

    @property
    def is_volunteer(self) -> bool:
        return self.role.lower() == "volunteer"


class VolunteerSummary(BaseModel):
    """Compact volunteer representation embedded in match responses"""
    id: str
    name: str
    email: str | None = None

    @classmethod
    def from_volunteer(cls, volunteer: Volunteer) -> "VolunteerSummary":
        return cls(
            id=volunteer.id,
            name=volunteer.profile.full_name or volunteer.id,
            email=volunteer.email,
        )

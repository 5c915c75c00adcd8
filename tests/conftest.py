"""Pytest configuration and fixtures"""

from datetime import datetime, timedelta
from typing import Any

import pytest

from shiftpilot.schemas.events import Event
from shiftpilot.schemas.volunteers import Volunteer
from shiftpilot.services.data_source import InMemoryDataSource
from shiftpilot.services.matching import VolunteerMatchingService
from shiftpilot.services.scoring import MatchingAlgorithm

# 2025-06-02 is a Monday
MONDAY = datetime(2025, 6, 2)
SATURDAY = datetime(2025, 6, 7)
NOW = datetime(2025, 6, 1, 12, 0)

FIRST_AID = "skill_004"
EVENT_PLANNING = "skill_001"
FOOD_SERVICE = "skill_009"


def make_volunteer(volunteer_id: str = "vol_001", **profile: Any) -> Volunteer:
    """Build a volunteer from keyword profile fields"""
    created_at = profile.pop("created_at", NOW - timedelta(days=30))
    role = profile.pop("role", "volunteer")
    return Volunteer(
        id=volunteer_id,
        email=f"{volunteer_id}@example.com",
        role=role,
        created_at=created_at,
        profile=profile,
    )


def make_event(event_id: str = "event_001", **fields: Any) -> Event:
    """Build an event on a Monday 09:00-17:00 unless overridden"""
    data = {
        "title": f"Event {event_id}",
        "start_date": MONDAY.replace(hour=9),
        "end_date": MONDAY.replace(hour=17),
        "urgency_level": "MEDIUM",
        "category": "community",
        "max_volunteers": 10,
        "current_volunteers": 0,
    }
    data.update(fields)
    return Event(id=event_id, **data)


@pytest.fixture
def houston_volunteer() -> Volunteer:
    return make_volunteer(
        "vol_houston",
        first_name="Maria",
        last_name="Lopez",
        latitude=29.7604,
        longitude=-95.3698,
        skills=[{"skill_id": FIRST_AID, "proficiency": "ADVANCED"}],
        availability=[{
            "day_of_week": "Monday",
            "start_time": "09:00",
            "end_time": "17:00",
            "is_recurring": True,
        }],
        preferences={"causes": ["healthcare"], "max_distance": 25},
    )


@pytest.fixture
def houston_event() -> Event:
    return make_event(
        "event_clinic",
        title="Community Health Clinic",
        latitude=29.7520,
        longitude=-95.3720,
        urgency_level="HIGH",
        category="healthcare",
        requirements=[{"skill_id": FIRST_AID, "min_level": "ADVANCED", "is_required": True}],
    )


@pytest.fixture
def algorithm() -> MatchingAlgorithm:
    return MatchingAlgorithm()


@pytest.fixture
def data_source(houston_volunteer, houston_event) -> InMemoryDataSource:
    far_volunteer = make_volunteer(
        "vol_far",
        latitude=32.7767,
        longitude=-96.7970,  # Dallas
        skills=[{"skill_id": EVENT_PLANNING, "proficiency": "beginner"}],
    )
    partial_volunteer = make_volunteer(
        "vol_partial",
        first_name="Sam",
        last_name="Reed",
        latitude=29.7700,
        longitude=-95.3600,
        skills=[{"skill_id": FIRST_AID, "proficiency": "intermediate"}],
        availability=[{
            "day_of_week": "monday",
            "start_time": "12:00",
            "end_time": "17:00",
        }],
    )
    admin = make_volunteer("admin_001", role="admin")
    return InMemoryDataSource(
        volunteers=[houston_volunteer, far_volunteer, partial_volunteer, admin],
        events=[houston_event],
    )


@pytest.fixture
def service(data_source) -> VolunteerMatchingService:
    return VolunteerMatchingService(data_source)

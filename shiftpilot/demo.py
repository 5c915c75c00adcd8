"""Command-line demo: seed an in-memory data source and run the matcher end to end"""

import asyncio
import logging
from datetime import datetime, time, timedelta, timezone
from typing import Any

from shiftpilot.config import Settings
from shiftpilot.data.skills import find_skill_by_name
from shiftpilot.schemas.events import Event, EventStatus
from shiftpilot.schemas.volunteers import Volunteer
from shiftpilot.services.data_source import InMemoryDataSource
from shiftpilot.services.matching import VolunteerMatchingService
from shiftpilot.utils.logging import setup_logging

logger = logging.getLogger(__name__)


def skill_id(name: str) -> str:
    """Catalog id for a skill display name"""
    skill = find_skill_by_name(name)
    if skill is None:
        raise ValueError(f"Unknown skill: {name}")
    return skill.id


def next_monday(now: datetime) -> datetime:
    days_ahead = (7 - now.weekday()) % 7 or 7
    return datetime.combine(now.date() + timedelta(days=days_ahead), time(9, 0))


def build_demo_data_source(now: datetime | None = None) -> InMemoryDataSource:
    """Three volunteers and two published events in the Houston area"""
    now = now or datetime.now(timezone.utc)
    monday = next_monday(now)

    volunteers = [
        Volunteer(
            id="vol_demo_maria",
            email="maria@example.org",
            created_at=now - timedelta(days=365),
            profile={
                "first_name": "Maria",
                "last_name": "Lopez",
                "phone": "+1-713-555-0101",
                "address": "1200 Main St, Houston, TX",
                "latitude": 29.7604,
                "longitude": -95.3698,
                "skills": [{"skill_id": skill_id("First Aid/CPR"), "proficiency": "ADVANCED"}],
                "availability": [
                    {"day_of_week": "Monday", "start_time": "09:00", "end_time": "17:00"}
                ],
                "preferences": {"causes": ["healthcare"], "max_distance": 25},
            },
        ),
        Volunteer(
            id="vol_demo_sam",
            email="sam@example.org",
            created_at=now - timedelta(days=40),
            profile={
                "first_name": "Sam",
                "last_name": "Reed",
                "location": {"lat": 29.7700, "lon": -95.3600},
                "skills": [
                    {"skill_id": skill_id("Food Service"), "proficiency": "intermediate"},
                    {"skill_id": skill_id("Event Planning"), "proficiency": "beginner"},
                ],
                "availability": [
                    {"day_of_week": "monday", "start_time": "12:00", "end_time": "17:00"}
                ],
                "preferences": {"causes": ["hunger"], "preferred_time_slots": ["afternoon"]},
            },
        ),
        Volunteer(
            id="vol_demo_lee",
            email="lee@example.org",
            created_at=now - timedelta(days=10),
            profile={
                "first_name": "Lee",
                "last_name": "Park",
                "latitude": 30.2672,
                "longitude": -97.7431,
                "skills": [{"skill_id": skill_id("Event Planning"), "proficiency": "EXPERT"}],
                "availability": [
                    {"day_of_week": "Saturday", "start_time": "08:00", "end_time": "14:00"}
                ],
                "preferences": {"weekdays_only": False},
            },
        ),
    ]

    events = [
        Event(
            id="event_demo_clinic",
            title="Community Health Clinic",
            latitude=29.7520,
            longitude=-95.3720,
            start_date=monday,
            end_date=monday.replace(hour=17),
            urgency_level="HIGH",
            category="healthcare",
            max_volunteers=2,
            requirements=[
                {"skill_id": skill_id("First Aid/CPR"), "min_level": "ADVANCED", "is_required": True}
            ],
        ),
        Event(
            id="event_demo_pantry",
            title="Food Pantry Shift",
            latitude=29.7650,
            longitude=-95.3650,
            start_date=monday.replace(hour=13),
            end_date=monday.replace(hour=17),
            urgency_level="urgent",
            category="hunger",
            max_volunteers=3,
            requirements=[
                {"skill_id": skill_id("Food Service"), "min_level": "BEGINNER", "is_required": True},
                {"skill_id": skill_id("Event Planning"), "is_required": False},
            ],
        ),
    ]

    return InMemoryDataSource(volunteers=volunteers, events=events)


async def run_demo(config: Settings | None = None, now: datetime | None = None) -> dict[str, Any]:
    """Suggest, optimize and bulk-assign every published demo event"""
    data_source = build_demo_data_source(now)
    service = VolunteerMatchingService(data_source, config=config)

    suggestions = await service.get_automatic_suggestions(min_score=0)
    logger.info(f"Generated suggestions for {suggestions.events_with_suggestions} events")

    assignments = {}
    for event in await data_source.list_events(EventStatus.PUBLISHED):
        optimized = await service.optimize_assignments(event.id)
        result = await service.bulk_assign(event.id, optimized.optimized_assignments)
        assignments[event.id] = result.summary

    stats = await service.get_matching_stats()

    return {
        "suggestions": suggestions,
        "assignments": assignments,
        "stats": stats,
    }


def main() -> None:
    setup_logging()
    logger.info("Starting ShiftPilot demo...")

    summary = asyncio.run(run_demo())

    for event_id, result in summary["assignments"].items():
        print(f"{event_id}: {result.successful} assigned, {result.failed} failed")
    print(summary["stats"].model_dump_json(indent=2))


if __name__ == "__main__":
    main()

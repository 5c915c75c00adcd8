"""Data access collaborator used by the matching service"""

import logging
from datetime import datetime, timezone
from typing import Protocol, runtime_checkable
from uuid import uuid4

from shiftpilot.schemas.events import (
    Assignment,
    AssignmentCreate,
    AssignmentStatus,
    Event,
    EventStatus,
)
from shiftpilot.schemas.volunteers import Volunteer

logger = logging.getLogger(__name__)


@runtime_checkable
class MatchingDataSource(Protocol):
    """Async access to the volunteers, events and assignments the matcher reads"""

    async def get_event(self, event_id: str) -> Event | None: ...

    async def get_volunteer(self, volunteer_id: str) -> Volunteer | None: ...

    async def list_volunteers(self) -> list[Volunteer]: ...

    async def list_events(self, status: EventStatus | None = None) -> list[Event]: ...

    async def get_event_assignments(self, event_id: str) -> list[Assignment]: ...

    async def get_volunteer_assignments(self, volunteer_id: str) -> list[Assignment]: ...

    async def create_assignment(self, data: AssignmentCreate) -> Assignment: ...


class InMemoryDataSource:
    """Dictionary-backed data source for demos, seeding and tests"""

    def __init__(
        self,
        volunteers: list[Volunteer] | None = None,
        events: list[Event] | None = None,
        assignments: list[Assignment] | None = None,
    ):
        self.volunteers: dict[str, Volunteer] = {v.id: v for v in volunteers or []}
        self.events: dict[str, Event] = {e.id: e for e in events or []}
        self.assignments: dict[str, Assignment] = {a.id: a for a in assignments or []}

    async def get_event(self, event_id: str) -> Event | None:
        return self.events.get(event_id)

    async def get_volunteer(self, volunteer_id: str) -> Volunteer | None:
        return self.volunteers.get(volunteer_id)

    async def list_volunteers(self) -> list[Volunteer]:
        return [v for v in self.volunteers.values() if v.is_volunteer]

    async def list_events(self, status: EventStatus | None = None) -> list[Event]:
        if status is None:
            return list(self.events.values())
        return [e for e in self.events.values() if e.status == status]

    async def get_event_assignments(self, event_id: str) -> list[Assignment]:
        return [a for a in self.assignments.values() if a.event_id == event_id]

    async def get_volunteer_assignments(self, volunteer_id: str) -> list[Assignment]:
        return [a for a in self.assignments.values() if a.volunteer_id == volunteer_id]

    async def create_assignment(self, data: AssignmentCreate) -> Assignment:
        """
        Assign a volunteer to an event.

        Raises ValueError when the event or volunteer is unknown, the event
        is not accepting volunteers or is full, or the volunteer already
        holds an active assignment. A cancelled assignment is reactivated
        rather than duplicated.
        """
        event = self.events.get(data.event_id)
        if not event:
            raise ValueError("Event not found")

        volunteer = self.volunteers.get(data.volunteer_id)
        if not volunteer:
            raise ValueError("Volunteer not found")

        if not volunteer.is_volunteer:
            raise ValueError("User is not a volunteer")

        if event.status != EventStatus.PUBLISHED:
            raise ValueError("Event is not accepting volunteers")

        if event.is_at_capacity:
            raise ValueError("Event is at capacity")

        existing = next(
            (
                a for a in self.assignments.values()
                if a.event_id == data.event_id and a.volunteer_id == data.volunteer_id
            ),
            None,
        )
        if existing and existing.is_active:
            raise ValueError("Volunteer is already assigned to this event")

        assignment = Assignment(
            id=existing.id if existing else str(uuid4()),
            event_id=data.event_id,
            volunteer_id=data.volunteer_id,
            status=data.status,
            match_score=data.match_score,
            notes=data.notes,
            assigned_at=datetime.now(timezone.utc),
        )
        self.assignments[assignment.id] = assignment
        self.events[event.id] = event.model_copy(
            update={"current_volunteers": event.current_volunteers + 1}
        )

        logger.info(
            f"{'Reactivated' if existing else 'Created'} assignment {assignment.id} "
            f"for volunteer {data.volunteer_id} on event {data.event_id}"
        )
        return assignment

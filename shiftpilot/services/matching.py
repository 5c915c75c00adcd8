"""Volunteer-to-event matching, suggestion and assignment optimization"""

import logging
import time
from datetime import datetime, timezone

from shiftpilot.config import Settings, settings as default_settings
from shiftpilot.schemas.events import (
    Assignment,
    AssignmentCreate,
    AssignmentStatus,
    Event,
    EventStatus,
    EventSummary,
)
from shiftpilot.schemas.matching import (
    AssignmentOutcome,
    AssignmentProposal,
    BulkAssignmentResult,
    BulkAssignmentSummary,
    EventMatch,
    EventMatches,
    EventSuggestion,
    MatchDetail,
    MatchingStats,
    MatchResult,
    OptimizationResult,
    PlatformMatchingStats,
    ScoreDistribution,
    SuggestionsResponse,
    VolunteerMatch,
    VolunteerMatches,
)
from shiftpilot.schemas.volunteers import Volunteer, VolunteerSummary
from shiftpilot.services.data_source import MatchingDataSource
from shiftpilot.services.scoring import MatchingAlgorithm, round_half_up

logger = logging.getLogger(__name__)

SKILLS_COVERAGE_MIN_SCORE = 60


class VolunteerMatchingService:
    """Service for ranking volunteers against events and proposing assignments"""

    def __init__(
        self,
        data_source: MatchingDataSource,
        algorithm: MatchingAlgorithm | None = None,
        config: Settings | None = None,
    ):
        self.data_source = data_source
        self.algorithm = algorithm or MatchingAlgorithm()
        self.config = config or default_settings

    async def calculate_match(self, volunteer_id: str, event_id: str) -> MatchDetail:
        """Score a single volunteer against a single event"""
        volunteer = await self._get_volunteer(volunteer_id)
        event = await self._get_event(event_id)

        result = self.algorithm.calculate_match_score(volunteer, event)

        return MatchDetail(
            volunteer=VolunteerSummary.from_volunteer(volunteer),
            event=EventSummary.from_event(event),
            match_score=result.total_score,
            match_quality=result.match_quality,
            result=result,
        )

    async def get_available_volunteers(
        self,
        event_id: str,
        include_assigned: bool = False
    ) -> list[Volunteer]:
        """Volunteers eligible for an event, optionally including those already assigned"""
        volunteers = await self.data_source.list_volunteers()
        if include_assigned:
            return volunteers

        assignments = await self.data_source.get_event_assignments(event_id)
        assigned_ids = {a.volunteer_id for a in assignments if a.is_active}

        return [v for v in volunteers if v.id not in assigned_ids]

    async def find_matches_for_event(
        self,
        event_id: str,
        limit: int | None = None,
        min_score: int = 0,
        include_assigned: bool = False,
    ) -> EventMatches:
        """
        Rank volunteers for an event.
        Candidates scoring below min_score or whose score could not be
        calculated are left out.
        """
        start_time = time.time()
        if limit is None:
            limit = self.config.default_event_match_limit

        event = await self._get_event(event_id)
        logger.info(f"Starting volunteer matching for event {event_id}")

        volunteers = await self.get_available_volunteers(event_id, include_assigned)
        logger.debug(f"Found {len(volunteers)} candidate volunteers")

        if not volunteers:
            return EventMatches(
                event=EventSummary.from_event(event),
                matches=[],
                total_volunteers=0,
                message="No available volunteers found for this event",
                search_time_ms=(time.time() - start_time) * 1000,
            )

        matches = []
        for volunteer in volunteers:
            result = self._score_pair(volunteer, event)
            if result is None or result.total_score < min_score:
                continue
            matches.append(VolunteerMatch(
                volunteer=VolunteerSummary.from_volunteer(volunteer),
                match_score=result.total_score,
                match_quality=result.match_quality,
                score_breakdown=result.score_breakdown,
                recommendations=result.recommendations,
                calculated_at=result.calculated_at,
            ))

        matches.sort(key=lambda m: m.match_score, reverse=True)
        matching_stats = self.generate_matching_stats(matches, event)
        matches = matches[:limit]

        processing_time_ms = (time.time() - start_time) * 1000
        logger.info(
            f"Volunteer matching completed in {processing_time_ms:.2f}ms, "
            f"found {len(matches)} matches for event {event_id}"
        )

        return EventMatches(
            event=EventSummary.from_event(event),
            matches=matches,
            total_volunteers=len(volunteers),
            matching_stats=matching_stats,
            message=None if matches else "No volunteers met the minimum match score",
            search_time_ms=processing_time_ms,
        )

    async def find_matches_for_volunteer(
        self,
        volunteer_id: str,
        limit: int | None = None,
        min_score: int = 0,
        status_filter: EventStatus = EventStatus.PUBLISHED,
    ) -> VolunteerMatches:
        """Rank open events for a volunteer"""
        start_time = time.time()
        if limit is None:
            limit = self.config.default_volunteer_match_limit

        volunteer = await self._get_volunteer(volunteer_id)
        events = await self.get_available_events(volunteer_id, status_filter)
        logger.debug(f"Found {len(events)} open events for volunteer {volunteer_id}")

        if not events:
            return VolunteerMatches(
                volunteer=VolunteerSummary.from_volunteer(volunteer),
                matches=[],
                total_events=0,
                message="No available events found",
                search_time_ms=(time.time() - start_time) * 1000,
            )

        matches = []
        for event in events:
            result = self._score_pair(volunteer, event)
            if result is None or result.total_score < min_score:
                continue
            matches.append(EventMatch(
                event=EventSummary.from_event(event),
                match_score=result.total_score,
                match_quality=result.match_quality,
                score_breakdown=result.score_breakdown,
                recommendations=result.recommendations,
                available_slots=event.available_slots,
                calculated_at=result.calculated_at,
            ))

        matches.sort(key=lambda m: m.match_score, reverse=True)
        matches = matches[:limit]

        return VolunteerMatches(
            volunteer=VolunteerSummary.from_volunteer(volunteer),
            matches=matches,
            total_events=len(events),
            message=None if matches else "No events met the minimum match score",
            search_time_ms=(time.time() - start_time) * 1000,
        )

    async def get_available_events(
        self,
        volunteer_id: str,
        status_filter: EventStatus = EventStatus.PUBLISHED,
    ) -> list[Event]:
        """Events in the given status with open slots the volunteer has not joined"""
        events = await self.data_source.list_events(status_filter)
        assignments = await self.data_source.get_volunteer_assignments(volunteer_id)
        joined_event_ids = {a.event_id for a in assignments if a.is_active}

        return [
            event for event in events
            if not event.is_at_capacity and event.id not in joined_event_ids
        ]

    def generate_matching_stats(
        self,
        matches: list[VolunteerMatch],
        event: Event
    ) -> MatchingStats:
        """Summarize the score distribution of an event's candidates"""
        if not matches:
            return MatchingStats()

        distribution = ScoreDistribution()
        for match in matches:
            score = match.match_score
            if score >= 90:
                distribution.excellent += 1
            elif score >= 80:
                distribution.very_good += 1
            elif score >= 70:
                distribution.good += 1
            elif score >= 60:
                distribution.fair += 1
            else:
                distribution.poor += 1

        if not event.requirements:
            skills_coverage = 100
        else:
            covered = sum(
                1 for match in matches
                if match.score_breakdown
                and match.score_breakdown.skills >= SKILLS_COVERAGE_MIN_SCORE
            )
            skills_coverage = round_half_up(covered / len(matches) * 100)

        average_score = round_half_up(sum(m.match_score for m in matches) / len(matches))

        return MatchingStats(
            average_score=average_score,
            score_distribution=distribution,
            skills_coverage=skills_coverage,
        )

    async def get_automatic_suggestions(
        self,
        min_score: int | None = None,
        max_suggestions_per_event: int | None = None,
    ) -> SuggestionsResponse:
        """Top candidates for every published event that still needs volunteers"""
        if min_score is None:
            min_score = self.config.suggestion_min_score
        if max_suggestions_per_event is None:
            max_suggestions_per_event = self.config.max_suggestions_per_event

        events = [
            event for event in await self.data_source.list_events(EventStatus.PUBLISHED)
            if event.needs_volunteers
        ]

        suggestions = []
        for event in events:
            try:
                event_matches = await self.find_matches_for_event(
                    event.id,
                    limit=max_suggestions_per_event,
                    min_score=min_score,
                )
            except Exception as e:
                logger.warning(f"Skipping suggestions for event {event.id}: {e}")
                continue

            if not event_matches.matches:
                continue

            suggestions.append(EventSuggestion(
                event_id=event.id,
                event_title=event.title,
                urgency_level=event.urgency_level,
                spots_needed=event.available_slots,
                suggested_volunteers=event_matches.matches,
            ))

        # Most urgent first, then the events missing the most people
        suggestions.sort(
            key=lambda s: (
                s.urgency_level.priority if s.urgency_level else 0,
                s.spots_needed,
            ),
            reverse=True,
        )

        return SuggestionsResponse(
            suggestions=suggestions,
            total_events=len(events),
            events_with_suggestions=len(suggestions),
        )

    async def optimize_assignments(
        self,
        event_id: str,
        max_assignments: int | None = None,
        preserve_confirmed: bool = True,
        include_assigned: bool = False,
        min_score: int = 0,
    ) -> OptimizationResult:
        """
        Greedily propose the best-scoring volunteers for an event's open slots.

        With preserve_confirmed, confirmed volunteers keep their slots and are
        never re-ranked; the remaining slots are filled from the ranked pool.
        Pending assignees outside the pool still occupy their seats, and
        proposals for unassigned volunteers never exceed the event's open
        seats. An event at capacity yields no proposals rather than an error.
        """
        event = await self._get_event(event_id)
        assignments = await self.data_source.get_event_assignments(event_id)

        confirmed_ids = [
            a.volunteer_id for a in assignments
            if a.status == AssignmentStatus.CONFIRMED
        ]
        pending_ids = [
            a.volunteer_id for a in assignments
            if a.is_active and a.status != AssignmentStatus.CONFIRMED
        ]
        preserved_ids = confirmed_ids if preserve_confirmed else []

        if event.is_at_capacity:
            logger.info(f"Event {event_id} is at capacity, nothing to optimize")
            return OptimizationResult(
                event_id=event_id,
                preserved_volunteer_ids=preserved_ids,
                total_slots_available=0,
                available_slots=0,
                message="Event is at capacity",
            )

        if preserve_confirmed:
            # Pending assignees left out of the pool keep their seats as well
            occupied = len(confirmed_ids) + (0 if include_assigned else len(pending_ids))
            total_slots = max(0, event.max_volunteers - occupied)
        else:
            total_slots = event.available_slots

        available_slots = total_slots
        if max_assignments is not None:
            available_slots = max(0, min(max_assignments, total_slots))

        if available_slots == 0:
            return OptimizationResult(
                event_id=event_id,
                preserved_volunteer_ids=preserved_ids,
                total_slots_available=total_slots,
                available_slots=0,
                message="No open slots to fill",
            )

        volunteers = await self.get_available_volunteers(event_id, include_assigned)
        excluded_ids = set(preserved_ids)
        candidates = [v for v in volunteers if v.id not in excluded_ids]

        ranked: list[tuple[Volunteer, MatchResult]] = []
        for volunteer in candidates:
            result = self._score_pair(volunteer, event)
            if result is not None and result.total_score >= min_score:
                ranked.append((volunteer, result))
        ranked.sort(key=lambda pair: pair[1].total_score, reverse=True)

        proposals = self._select_assignments(
            ranked,
            available_slots,
            open_seats=event.available_slots,
            assigned_ids=set(confirmed_ids) | set(pending_ids),
        )

        logger.info(
            f"Optimized event {event_id}: {len(proposals)} proposals "
            f"for {available_slots} slots from {len(candidates)} candidates"
        )

        return OptimizationResult(
            event_id=event_id,
            optimized_assignments=proposals,
            preserved_volunteer_ids=preserved_ids,
            total_slots_available=total_slots,
            available_slots=available_slots,
            candidates_considered=len(candidates),
            message=None if proposals else "No volunteers met the minimum match score",
        )

    def _select_assignments(
        self,
        ranked: list[tuple[Volunteer, MatchResult]],
        slots: int,
        open_seats: int,
        assigned_ids: set[str],
    ) -> list[AssignmentProposal]:
        """
        Take the best candidates in order, skipping duplicates, until slots run out.
        Volunteers without an assignment on the event need one of the event's
        open seats; already-assigned volunteers keep the seat they hold.
        """
        proposals: list[AssignmentProposal] = []
        seen: set[str] = set()

        for volunteer, result in ranked:
            if len(proposals) >= slots:
                break
            if volunteer.id in seen:
                continue
            needs_seat = volunteer.id not in assigned_ids
            if needs_seat and open_seats <= 0:
                continue
            seen.add(volunteer.id)
            if needs_seat:
                open_seats -= 1
            proposals.append(AssignmentProposal(
                volunteer_id=volunteer.id,
                volunteer_name=volunteer.profile.full_name or None,
                match_score=result.total_score,
                match_quality=result.match_quality,
                assignment_reason=(
                    f"Optimized assignment - {result.match_quality} match "
                    f"(score {result.total_score})"
                ),
            ))

        return proposals

    async def bulk_assign(
        self,
        event_id: str,
        proposals: list[AssignmentProposal],
        auto_confirm_high_matches: bool = True,
    ) -> BulkAssignmentResult:
        """
        Create an assignment for each proposal, one at a time.
        A failing proposal is recorded and the batch carries on.
        """
        results = [
            await self._assign_one(event_id, proposal, auto_confirm_high_matches)
            for proposal in proposals
        ]

        successful = sum(1 for r in results if r.success)
        failed = len(results) - successful
        success_rate = round_half_up(successful / len(results) * 100) if results else 0

        logger.info(
            f"Bulk assignment for event {event_id} completed: "
            f"{successful} successful, {failed} failed"
        )

        return BulkAssignmentResult(
            event_id=event_id,
            results=results,
            summary=BulkAssignmentSummary(
                total_assignments=len(results),
                successful=successful,
                failed=failed,
                success_rate=success_rate,
            ),
            message=f"Bulk assignment completed: {successful} successful, {failed} failed",
        )

    async def _assign_one(
        self,
        event_id: str,
        proposal: AssignmentProposal,
        auto_confirm_high_matches: bool
    ) -> AssignmentOutcome:
        if auto_confirm_high_matches and proposal.match_score >= self.config.auto_confirm_min_score:
            status = AssignmentStatus.CONFIRMED
        else:
            status = AssignmentStatus.PENDING

        try:
            assignment = await self.data_source.create_assignment(AssignmentCreate(
                event_id=event_id,
                volunteer_id=proposal.volunteer_id,
                status=status,
                match_score=proposal.match_score,
                match_quality=proposal.match_quality,
                notes=proposal.assignment_reason
                or f"Bulk assignment - {proposal.match_quality} match",
            ))
        except Exception as e:
            logger.warning(
                f"Failed to assign volunteer {proposal.volunteer_id} to event {event_id}: {e}"
            )
            return AssignmentOutcome(
                volunteer_id=proposal.volunteer_id,
                success=False,
                match_score=proposal.match_score,
                error=str(e) or e.__class__.__name__,
            )

        return AssignmentOutcome(
            volunteer_id=proposal.volunteer_id,
            success=True,
            match_score=proposal.match_score,
            status=status,
            assignment_id=assignment.id,
        )

    async def get_matching_stats(self) -> PlatformMatchingStats:
        """Platform-wide matching statistics"""
        events = await self.data_source.list_events()
        volunteers = await self.data_source.list_volunteers()

        assignments: list[Assignment] = []
        for event in events:
            assignments.extend(await self.data_source.get_event_assignments(event.id))
        active = [a for a in assignments if a.is_active]
        confirmed = [a for a in active if a.status == AssignmentStatus.CONFIRMED]

        average_match_score = (
            round_half_up(sum(a.match_score for a in confirmed) / len(confirmed))
            if confirmed else 0
        )

        assigned_volunteer_ids = {a.volunteer_id for a in active}
        matching_efficiency = (
            round_half_up(
                len(assigned_volunteer_ids & {v.id for v in volunteers})
                / len(volunteers) * 100
            )
            if volunteers else 0
        )

        return PlatformMatchingStats(
            total_events=len(events),
            total_volunteers=len(volunteers),
            total_assignments=len(active),
            confirmed_assignments=len(confirmed),
            events_needing_volunteers=sum(1 for e in events if e.needs_volunteers),
            average_match_score=average_match_score,
            matching_efficiency=matching_efficiency,
            metadata={"generated_at": datetime.now(timezone.utc).isoformat()},
        )

    def get_algorithm_info(self) -> dict:
        """Weights, factor descriptions and quality bands of the active algorithm"""
        return self.algorithm.describe()

    def _score_pair(self, volunteer: Volunteer, event: Event) -> MatchResult | None:
        """Score one pair, returning None when no usable score could be produced"""
        try:
            result = self.algorithm.calculate_match_score(volunteer, event)
        except Exception as e:
            logger.error(
                f"Error matching volunteer {volunteer.id} to event {event.id}: {e}",
                exc_info=True,
            )
            return None

        if result.is_degraded:
            logger.debug(f"Skipping volunteer {volunteer.id}: {result.error}")
            return None
        return result

    async def _get_event(self, event_id: str) -> Event:
        event = await self.data_source.get_event(event_id)
        if not event:
            raise ValueError("Event not found")
        return event

    async def _get_volunteer(self, volunteer_id: str) -> Volunteer:
        volunteer = await self.data_source.get_volunteer(volunteer_id)
        if not volunteer:
            raise ValueError("Volunteer not found")
        if not volunteer.is_volunteer:
            raise ValueError("User is not a volunteer")
        return volunteer

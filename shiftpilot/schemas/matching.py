"""Schemas for volunteer matching system"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from shiftpilot.config import MatchingWeights
from shiftpilot.schemas.events import AssignmentStatus, EventSummary, UrgencyLevel
from shiftpilot.schemas.volunteers import VolunteerSummary


class ScoreBreakdown(BaseModel):
    """Per-factor scores for a volunteer/event pair"""
    location: int = Field(ge=0, le=100)
    skills: int = Field(ge=0, le=100)
    availability: int = Field(ge=0, le=100)
    preferences: int = Field(ge=0, le=100)
    reliability: int = Field(ge=0, le=100)

    def weighted_total(self, weights: MatchingWeights) -> float:
        """Unrounded weighted sum of the factor scores"""
        return (
            self.location * weights.location
            + self.skills * weights.skills
            + self.availability * weights.availability
            + self.preferences * weights.preferences
            + self.reliability * weights.reliability
        )


class Recommendation(BaseModel):
    type: str
    priority: str
    message: str
    missing_skills: list[str] | None = None


class MatchResult(BaseModel):
    """Score of one volunteer against one event"""
    volunteer_id: str | None = None
    event_id: str | None = None
    total_score: int = Field(ge=0, le=100)
    score_breakdown: ScoreBreakdown | None = None
    weights: MatchingWeights | None = None
    recommendations: list[Recommendation] = Field(default_factory=list)
    match_quality: str
    error: str | None = None
    calculated_at: datetime

    @property
    def is_degraded(self) -> bool:
        return self.error is not None


class VolunteerMatch(BaseModel):
    """A ranked volunteer candidate for an event"""
    volunteer: VolunteerSummary
    match_score: int
    match_quality: str
    score_breakdown: ScoreBreakdown | None = None
    recommendations: list[Recommendation] = Field(default_factory=list)
    calculated_at: datetime


class EventMatch(BaseModel):
    """A ranked event for a volunteer"""
    event: EventSummary
    match_score: int
    match_quality: str
    score_breakdown: ScoreBreakdown | None = None
    recommendations: list[Recommendation] = Field(default_factory=list)
    available_slots: int
    calculated_at: datetime


class ScoreDistribution(BaseModel):
    excellent: int = 0
    very_good: int = 0
    good: int = 0
    fair: int = 0
    poor: int = 0


class MatchingStats(BaseModel):
    """Statistics about one event's candidate pool"""
    average_score: int = 0
    score_distribution: ScoreDistribution = Field(default_factory=ScoreDistribution)
    skills_coverage: int = 0


class EventMatches(BaseModel):
    event: EventSummary
    matches: list[VolunteerMatch]
    total_volunteers: int
    matching_stats: MatchingStats = Field(default_factory=MatchingStats)
    message: str | None = None
    search_time_ms: float = 0.0


class VolunteerMatches(BaseModel):
    volunteer: VolunteerSummary
    matches: list[EventMatch]
    total_events: int
    message: str | None = None
    search_time_ms: float = 0.0


class MatchDetail(BaseModel):
    """Full match calculation for one volunteer/event pair"""
    volunteer: VolunteerSummary
    event: EventSummary
    match_score: int
    match_quality: str
    result: MatchResult


class EventSuggestion(BaseModel):
    event_id: str
    event_title: str
    urgency_level: UrgencyLevel | None = None
    spots_needed: int
    suggested_volunteers: list[VolunteerMatch]


class SuggestionsResponse(BaseModel):
    suggestions: list[EventSuggestion]
    total_events: int
    events_with_suggestions: int


class AssignmentProposal(BaseModel):
    """A volunteer the optimizer proposes to assign"""
    volunteer_id: str
    volunteer_name: str | None = None
    match_score: int = Field(ge=0, le=100)
    match_quality: str
    assignment_reason: str | None = None


class OptimizationResult(BaseModel):
    event_id: str
    optimized_assignments: list[AssignmentProposal] = Field(default_factory=list)
    preserved_volunteer_ids: list[str] = Field(default_factory=list)
    total_slots_available: int
    available_slots: int
    candidates_considered: int = 0
    message: str | None = None


class AssignmentOutcome(BaseModel):
    """Result of assigning one proposed volunteer; either an assignment id or an error"""
    volunteer_id: str
    success: bool
    match_score: int
    status: AssignmentStatus | None = None
    assignment_id: str | None = None
    error: str | None = None


class BulkAssignmentSummary(BaseModel):
    total_assignments: int
    successful: int
    failed: int
    success_rate: int


class BulkAssignmentResult(BaseModel):
    event_id: str
    results: list[AssignmentOutcome]
    summary: BulkAssignmentSummary
    message: str


class PlatformMatchingStats(BaseModel):
    """Matching statistics across every event and volunteer"""
    total_events: int
    total_volunteers: int
    total_assignments: int
    confirmed_assignments: int
    events_needing_volunteers: int
    average_match_score: int
    matching_efficiency: int
    metadata: dict[str, Any] = Field(default_factory=dict)

"""Weighted multi-factor scoring of volunteers against events"""

import logging
import math
from collections.abc import Callable
from datetime import datetime, timezone

from shiftpilot.config import (
    DEFAULT_THRESHOLDS,
    DEFAULT_WEIGHTS,
    MatchingWeights,
    QualityThresholds,
)
from shiftpilot.data.skills import skill_name_lookup
from shiftpilot.schemas.events import Event, UrgencyLevel
from shiftpilot.schemas.matching import MatchResult, Recommendation, ScoreBreakdown
from shiftpilot.schemas.volunteers import Volunteer, VolunteerProfile, proficiency_rank
from shiftpilot.utils.geographic import haversine_distance
from shiftpilot.utils.scheduling import (
    calculate_time_overlap,
    day_name,
    format_time,
    get_time_slot,
    is_weekend,
)

logger = logging.getLogger(__name__)

NEUTRAL_LOCATION_SCORE = 50
NEUTRAL_PREFERENCES_SCORE = 50
MISSING_AVAILABILITY_SCORE = 30
BASE_RELIABILITY_SCORE = 75

NEARBY_DISTANCE_KM = 5
MAX_PROFICIENCY_RATIO = 1.5
OPTIONAL_SKILL_PARTIAL_CREDIT = 0.3
ALL_REQUIRED_SKILLS_BONUS = 10
VETERAN_ACCOUNT_MONTHS = 6

URGENCY_ADJUSTMENTS = {
    UrgencyLevel.CRITICAL: 10,
    UrgencyLevel.HIGH: 5,
    UrgencyLevel.MEDIUM: 0,
    UrgencyLevel.LOW: -5,
}

SkillLookup = Callable[[str], str | None]


def round_half_up(value: float) -> int:
    """Round .5 away from zero for positive scores"""
    return math.floor(value + 0.5)


def clamp_score(value: float) -> int:
    return max(0, min(100, round_half_up(value)))


def _identifier(obj: object) -> str | None:
    """String id of a scored object; ORM rows may carry integer keys"""
    value = getattr(obj, "id", None)
    return None if value is None else str(value)


class MatchingAlgorithm:
    """Scores volunteers against events using five weighted factors"""

    def __init__(
        self,
        weights: MatchingWeights = DEFAULT_WEIGHTS,
        thresholds: QualityThresholds = DEFAULT_THRESHOLDS,
        skill_lookup: SkillLookup = skill_name_lookup,
    ):
        self.weights = weights
        self.thresholds = thresholds
        self.skill_lookup = skill_lookup

    def calculate_match_score(
        self,
        volunteer: Volunteer,
        event: Event,
        now: datetime | None = None,
    ) -> MatchResult:
        """
        Calculate comprehensive match score between volunteer and event.

        Never raises: any failure while scoring yields a zero-score result
        carrying the error message.
        """
        calculated_at = now or datetime.now(timezone.utc)

        try:
            profile = volunteer.profile
            scores = ScoreBreakdown(
                location=self.calculate_location_score(profile, event),
                skills=self.calculate_skills_score(profile, event),
                availability=self.calculate_availability_score(profile, event),
                preferences=self.calculate_preferences_score(profile, event),
                reliability=self.calculate_reliability_score(volunteer, now=calculated_at),
            )

            total_score = min(round_half_up(scores.weighted_total(self.weights)), 100)
            recommendations = self.generate_recommendations(scores, volunteer, event)

            return MatchResult(
                volunteer_id=volunteer.id,
                event_id=event.id,
                total_score=total_score,
                score_breakdown=scores,
                weights=self.weights,
                recommendations=recommendations,
                match_quality=self.get_match_quality(total_score),
                calculated_at=calculated_at,
            )

        except Exception as e:
            volunteer_id = _identifier(volunteer)
            event_id = _identifier(event)
            logger.error(
                f"Error calculating match score for volunteer "
                f"{volunteer_id} and event {event_id}: {e}",
                exc_info=True,
            )
            return MatchResult(
                volunteer_id=volunteer_id,
                event_id=event_id,
                total_score=0,
                match_quality=self.get_match_quality(0),
                error=str(e) or e.__class__.__name__,
                calculated_at=calculated_at,
            )

    def calculate_location_score(self, profile: VolunteerProfile, event: Event) -> int:
        """Distance proximity score (0-100)"""
        volunteer_coords = profile.coordinates
        event_coords = event.coordinates
        if volunteer_coords is None or event_coords is None:
            return NEUTRAL_LOCATION_SCORE

        distance = haversine_distance(*volunteer_coords, *event_coords)

        # Two points lost per kilometer
        score = 100 - distance * 2

        if distance <= NEARBY_DISTANCE_KM:
            score += 10

        preferences = profile.preferences
        if preferences and preferences.max_distance and distance > preferences.max_distance:
            score -= 30

        return clamp_score(score)

    def calculate_skills_score(self, profile: VolunteerProfile, event: Event) -> int:
        """Skill alignment score (0-100), weighting required skills double"""
        if not event.requirements:
            return 100

        if not profile.skills:
            return 0

        total_score = 0.0
        max_possible_score = 0.0
        required_matched = 0
        required_total = sum(1 for req in event.requirements if req.is_required)

        for requirement in event.requirements:
            required_value = proficiency_rank(requirement.min_level)
            skill_weight = 2 if requirement.is_required else 1

            max_possible_score += required_value * skill_weight

            volunteer_skill = profile.find_skill(requirement.skill_id)
            if volunteer_skill:
                volunteer_value = proficiency_rank(volunteer_skill.proficiency)
                # Over-qualification earns a capped bonus
                proficiency_ratio = min(volunteer_value / required_value, MAX_PROFICIENCY_RATIO)
                total_score += proficiency_ratio * required_value * skill_weight

                if requirement.is_required:
                    required_matched += 1
            elif not requirement.is_required:
                total_score += required_value * skill_weight * OPTIONAL_SKILL_PARTIAL_CREDIT

        if required_total > 0 and required_matched == required_total:
            total_score += ALL_REQUIRED_SKILLS_BONUS
            max_possible_score += ALL_REQUIRED_SKILLS_BONUS

        if max_possible_score <= 0:
            return 100

        return clamp_score(total_score / max_possible_score * 100)

    def calculate_availability_score(self, profile: VolunteerProfile, event: Event) -> int:
        """Schedule compatibility score (0-100)"""
        if not profile.availability:
            return MISSING_AVAILABILITY_SCORE

        event_start = event.start_date
        event_day = day_name(event_start)
        event_date = event_start.date()

        day_slots = [
            slot for slot in profile.availability
            if (not slot.is_recurring and slot.specific_date == event_date)
            or (slot.is_recurring and slot.day_of_week == event_day)
        ]

        if not day_slots:
            return 0

        event_start_time = format_time(event_start)
        event_end_time = format_time(event.end_date)

        best_overlap = max(
            calculate_time_overlap(slot.start_time, slot.end_time, event_start_time, event_end_time)
            for slot in day_slots
        )

        score = best_overlap
        preferences = profile.preferences
        if preferences:
            if preferences.weekdays_only and is_weekend(event_start):
                score = max(score - 30, 0)

            if get_time_slot(event_start) in preferences.preferred_time_slots:
                score = min(score + 15, 100)

        return round_half_up(score)

    def calculate_preferences_score(self, profile: VolunteerProfile, event: Event) -> int:
        """Cause and urgency alignment score (0-100)"""
        preferences = profile.preferences
        if preferences is None:
            return NEUTRAL_PREFERENCES_SCORE

        score = NEUTRAL_PREFERENCES_SCORE

        if preferences.causes:
            causes = {cause.lower() for cause in preferences.causes}
            if event.category and event.category.lower() in causes:
                score += 30
            else:
                score -= 15

        score += URGENCY_ADJUSTMENTS.get(event.urgency_level, 0)

        return clamp_score(score)

    def calculate_reliability_score(
        self,
        volunteer: Volunteer,
        now: datetime | None = None,
    ) -> int:
        """
        Heuristic reliability score (0-100).
        There is no participation history yet, so profile completeness and
        account age stand in for it.
        """
        score = BASE_RELIABILITY_SCORE
        profile = volunteer.profile

        if profile.first_name and profile.last_name and profile.phone and profile.address:
            score += 10

        if profile.skills:
            score += 10

        if profile.availability:
            score += 5

        if volunteer.created_at is not None:
            now = now or datetime.now(timezone.utc)
            created_at = volunteer.created_at
            if created_at.tzinfo is None:
                created_at = created_at.replace(tzinfo=timezone.utc)
            if now.tzinfo is None:
                now = now.replace(tzinfo=timezone.utc)

            months_old = (now - created_at).total_seconds() / 86400 / 30
            if months_old > VETERAN_ACCOUNT_MONTHS:
                score += 10

        return clamp_score(score)

    def generate_recommendations(
        self,
        scores: ScoreBreakdown,
        volunteer: Volunteer,
        event: Event,
    ) -> list[Recommendation]:
        """Generate human-readable advice for the match"""
        recommendations = []

        if scores.location < 50:
            recommendations.append(Recommendation(
                type="location",
                priority="medium",
                message=(
                    "This event is quite far from the volunteer's location. Consider local "
                    "transportation options or remote participation if possible."
                ),
            ))

        if scores.skills < 60:
            missing_skills = self.find_missing_skills(volunteer.profile, event)
            if missing_skills:
                recommendations.append(Recommendation(
                    type="skills",
                    priority="high",
                    message=(
                        f"Volunteer may need training in: {', '.join(missing_skills)}. "
                        "Consider providing skill development opportunities."
                    ),
                    missing_skills=missing_skills,
                ))

        if scores.availability < 50:
            recommendations.append(Recommendation(
                type="availability",
                priority="high",
                message=(
                    "Limited availability overlap. Consider adjusting event timing "
                    "or breaking into shorter shifts."
                ),
            ))

        if scores.preferences < 40:
            recommendations.append(Recommendation(
                type="preferences",
                priority="low",
                message=(
                    "This event doesn't align strongly with volunteer's stated preferences. "
                    "Emphasize impact and learning opportunities."
                ),
            ))

        total_score = scores.weighted_total(self.weights)

        if total_score >= 80:
            recommendations.append(Recommendation(
                type="overall",
                priority="info",
                message="Excellent match! This volunteer is highly suitable for this event.",
            ))
        elif total_score >= 60:
            recommendations.append(Recommendation(
                type="overall",
                priority="info",
                message="Good match. Consider this volunteer for assignment with minor considerations.",
            ))
        elif total_score >= 40:
            recommendations.append(Recommendation(
                type="overall",
                priority="medium",
                message="Moderate match. Review specific areas of concern before assignment.",
            ))
        else:
            recommendations.append(Recommendation(
                type="overall",
                priority="high",
                message="Poor match. Consider alternative volunteers or event modifications.",
            ))

        return recommendations

    def find_missing_skills(self, profile: VolunteerProfile, event: Event) -> list[str]:
        """Display names of required skills the volunteer does not hold"""
        volunteer_skill_ids = profile.skill_ids()
        missing_skills = []

        for requirement in event.requirements:
            if not requirement.is_required or requirement.skill_id in volunteer_skill_ids:
                continue
            name = requirement.skill_name or self.skill_lookup(requirement.skill_id)
            if name:
                missing_skills.append(name)

        return missing_skills

    def get_match_quality(self, score: float) -> str:
        return self.thresholds.label_for(score)

    def describe(self) -> dict:
        """Algorithm configuration for display"""
        return {
            "weights": self.weights.model_dump(),
            "description": "ShiftPilot Volunteer Matching Algorithm",
            "components": {
                "location": "Distance-based scoring with volunteer preference consideration",
                "skills": "Skill alignment with proficiency level matching",
                "availability": "Schedule compatibility and time preference alignment",
                "preferences": "Cause interest and event urgency alignment",
                "reliability": "Profile completeness and account age",
            },
            "quality_thresholds": self.thresholds.model_dump(),
        }

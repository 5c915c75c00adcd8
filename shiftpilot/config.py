"""Application configuration using Pydantic Settings"""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class MatchingWeights(BaseModel):
    """Relative weight of each factor in the total match score"""
    model_config = ConfigDict(frozen=True)

    location: float = Field(default=0.35, ge=0.0, le=1.0)
    skills: float = Field(default=0.30, ge=0.0, le=1.0)
    availability: float = Field(default=0.25, ge=0.0, le=1.0)
    preferences: float = Field(default=0.10, ge=0.0, le=1.0)
    reliability: float = Field(default=0.05, ge=0.0, le=1.0)

    @property
    def total(self) -> float:
        return (
            self.location
            + self.skills
            + self.availability
            + self.preferences
            + self.reliability
        )


class QualityThresholds(BaseModel):
    """Lower bounds (inclusive) of each match quality label"""
    model_config = ConfigDict(frozen=True)

    excellent: int = 90
    very_good: int = 80
    good: int = 70
    fair: int = 60
    moderate: int = 50
    poor: int = 40

    def label_for(self, score: float) -> str:
        """Map a total score onto its quality label, highest band first"""
        if score >= self.excellent:
            return "Excellent"
        if score >= self.very_good:
            return "Very Good"
        if score >= self.good:
            return "Good"
        if score >= self.fair:
            return "Fair"
        if score >= self.moderate:
            return "Moderate"
        if score >= self.poor:
            return "Poor"
        return "Very Poor"


DEFAULT_WEIGHTS = MatchingWeights()
DEFAULT_THRESHOLDS = QualityThresholds()


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="SHIFTPILOT_",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_env: str = Field(default="development")
    app_debug: bool = Field(default=True)

    # Logging
    log_level: str = Field(default="INFO")
    log_format: str = Field(default="json")

    # Matching service defaults
    default_event_match_limit: int = Field(default=20, ge=1)
    default_volunteer_match_limit: int = Field(default=10, ge=1)
    suggestion_min_score: int = Field(default=70, ge=0, le=100)
    max_suggestions_per_event: int = Field(default=5, ge=1)
    auto_confirm_min_score: int = Field(default=80, ge=0, le=100)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalize log level names"""
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level

    def validate_configuration(self) -> dict[str, list[str]]:
        """Validate configuration and return any issues"""
        issues: dict[str, list[str]] = {"errors": [], "warnings": []}

        if self.log_format not in ("json", "text"):
            issues["errors"].append(
                f"log_format must be 'json' or 'text', got {self.log_format}"
            )

        if self.suggestion_min_score < DEFAULT_THRESHOLDS.moderate:
            issues["warnings"].append(
                "suggestion_min_score is below the 'Moderate' quality band; "
                "automatic suggestions may include weak matches"
            )

        if self.auto_confirm_min_score < self.suggestion_min_score:
            issues["warnings"].append(
                "auto_confirm_min_score is lower than suggestion_min_score"
            )

        if self.app_env == "production" and self.app_debug:
            issues["warnings"].append("Debug mode enabled in production")

        return issues


settings = Settings()

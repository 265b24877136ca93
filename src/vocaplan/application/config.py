from pathlib import Path
from typing import Any

from pydantic import Field, field_validator, model_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from vocaplan.domain import constants as c

from .analysis.analyzer import AnalyzerConfig
from .exposure import ExposurePolicy, ExposureSettings
from .task_planner import PlannerConfig, TaskPolicy


def config_files() -> list[Path]:
    return [
        Path.home() / ".config/vocaplan/config.toml",
        Path.home() / ".vocaplan.toml",
    ]


class EngineSettings(BaseSettings):
    """
    Configuration for the scheduling engine.
    Supports loading from:
    1. Environment variables (VOCAPLAN_*)
    2. Config file (~/.config/vocaplan/config.toml)
    3. Manual overrides (CLI)
    """

    model_config = SettingsConfigDict(
        env_prefix="VOCAPLAN_",
        extra="ignore",
    )

    # Dwell thresholds (seconds)
    very_familiar_threshold: float = Field(default=c.VERY_FAMILIAR_THRESHOLD, gt=0)
    familiar_threshold: float = Field(default=c.FAMILIAR_THRESHOLD, gt=0)
    unfamiliar_threshold: float = Field(default=c.UNFAMILIAR_THRESHOLD, gt=0)

    # Exposure counts per band
    very_familiar_exposures: int = Field(default=c.VERY_FAMILIAR_EXPOSURES, ge=1)
    familiar_exposures: int = Field(default=c.FAMILIAR_EXPOSURES, ge=1)
    unfamiliar_exposures: int = Field(default=c.UNFAMILIAR_EXPOSURES, ge=1)
    very_unfamiliar_exposures: int = Field(default=c.VERY_UNFAMILIAR_EXPOSURES, ge=1)

    # Swipe adjustment and clamp
    right_swipe_bonus: int = c.RIGHT_SWIPE_BONUS
    left_swipe_penalty: int = c.LEFT_SWIPE_PENALTY
    min_exposures: int = Field(default=c.MIN_EXPOSURES, ge=1)
    max_exposures: int = Field(default=c.MAX_EXPOSURES, ge=1)
    fixed_exposure_count: int = Field(default=c.FIXED_EXPOSURE_COUNT, ge=1)
    exposure_policy: ExposurePolicy = ExposurePolicy.DWELL

    # Analyzer
    minimum_exposures: int = Field(default=c.MINIMUM_ANALYZED_EXPOSURES, ge=0)
    include_zero_dwell: bool = False

    # Planner
    task_policy: TaskPolicy = TaskPolicy.QUANTITATIVE
    daily_review_count: int = Field(default=c.DAILY_REVIEW_COUNT, ge=0)
    new_word_exposures: int = Field(default=c.NEW_WORD_EXPOSURES, ge=0)
    review_word_exposures: int = Field(default=c.REVIEW_WORD_EXPOSURES, ge=0)
    front_load_ratio: float = Field(default=c.FRONT_LOAD_RATIO, gt=0, le=1)
    front_load_words: float = Field(default=c.FRONT_LOAD_WORDS, gt=0, le=1)

    # Word resolution
    missing_word_tolerance: float = Field(default=c.MISSING_WORD_TOLERANCE, ge=0, le=1)

    # CLI
    records_path: Path | None = None

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        from pydantic_settings import TomlConfigSettingsSource

        # First existing file wins; init and env both override it
        toml_file = next((f for f in config_files() if f.exists()), None)

        if toml_file:
            return (
                init_settings,
                env_settings,
                TomlConfigSettingsSource(settings_cls, toml_file=toml_file),
            )
        return (
            init_settings,
            env_settings,
        )

    @field_validator("records_path", mode="before")
    @classmethod
    def resolve_records_path(cls, v: Any) -> Path | None:
        if v:
            return Path(v).expanduser().resolve()
        return None

    @model_validator(mode="after")
    def check_ordering(self) -> "EngineSettings":
        if not (
            self.very_familiar_threshold < self.familiar_threshold < self.unfamiliar_threshold
        ):
            raise ValueError("dwell thresholds must be strictly increasing")
        if self.min_exposures > self.max_exposures:
            raise ValueError("min_exposures must not exceed max_exposures")
        return self

    def exposure_settings(self) -> ExposureSettings:
        return ExposureSettings(
            very_familiar_threshold=self.very_familiar_threshold,
            familiar_threshold=self.familiar_threshold,
            unfamiliar_threshold=self.unfamiliar_threshold,
            very_familiar_exposures=self.very_familiar_exposures,
            familiar_exposures=self.familiar_exposures,
            unfamiliar_exposures=self.unfamiliar_exposures,
            very_unfamiliar_exposures=self.very_unfamiliar_exposures,
            right_swipe_bonus=self.right_swipe_bonus,
            left_swipe_penalty=self.left_swipe_penalty,
            min_exposures=self.min_exposures,
            max_exposures=self.max_exposures,
            fixed_exposure_count=self.fixed_exposure_count,
        )

    def analyzer_config(self) -> AnalyzerConfig:
        return AnalyzerConfig(
            minimum_exposures=self.minimum_exposures,
            include_zero_dwell=self.include_zero_dwell,
        )

    def planner_config(self) -> PlannerConfig:
        return PlannerConfig(
            front_load_ratio=self.front_load_ratio,
            front_load_words=self.front_load_words,
            daily_review_count=self.daily_review_count,
            new_word_exposures=self.new_word_exposures,
            review_word_exposures=self.review_word_exposures,
        )


def resolve_config(cli_overrides: dict[str, Any] | None = None) -> EngineSettings:
    """
    Multi-layered configuration resolution.
    1. Defaults in EngineSettings
    2. ~/.config/vocaplan/config.toml (if exists)
    3. Environment variables (VOCAPLAN_*)
    4. cli_overrides (passed from Typer)
    """
    overrides = {k: v for k, v in (cli_overrides or {}).items() if v is not None}
    return EngineSettings(**overrides)

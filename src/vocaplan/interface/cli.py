"""vocaplan CLI: plan, analyze, review and record swipes from the terminal."""

import json
import logging
import sys
from datetime import date, datetime
from pathlib import Path
from typing import Annotated, Any

import typer
import yaml
from pydantic import ValidationError

from vocaplan.application.analysis.analyzer import DwellTimeAnalyzer
from vocaplan.application.analysis.report import build_daily_report
from vocaplan.application.config import EngineSettings, resolve_config
from vocaplan.application.exposure import ExposureDecisionMaker, build_strategy
from vocaplan.application.review_selector import ReviewSelector, familiarity_score
from vocaplan.application.scheduling.sm2 import SpacedRepetitionScheduler
from vocaplan.application.task_planner import (
    PRESETS,
    TaskPlanner,
    TaskPolicy,
    build_task_strategy,
    strategy_for_goal,
)
from vocaplan.application.word_resolver import difficult_words_for_passage
from vocaplan.consts import VERSION
from vocaplan.domain.errors import MissingWordData
from vocaplan.domain.models import LearningGoal, ReviewRecord, SwipeDirection
from vocaplan.infrastructure.adapters.records_file import RecordStore, load_store, save_store

# ---------------------------------------------------------------------------
# Root app
# ---------------------------------------------------------------------------

app = typer.Typer(
    help="vocaplan: adaptive vocabulary exposure and review scheduler.",
    no_args_is_help=True,
)

config_app = typer.Typer(help="Manage vocaplan configuration.")
app.add_typer(config_app, name="config")

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

logging.basicConfig(
    level=logging.INFO,
    format="%(levelname)s:%(name)s:%(message)s",
    stream=sys.stderr,
)
logger = logging.getLogger(__name__)


@app.callback()
def main_callback(
    ctx: typer.Context,
    verbose: Annotated[
        int,
        typer.Option("--verbose", "-v", count=True, help="Increase verbosity."),
    ] = 0,
):
    """Global settings for vocaplan."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    if verbose > 0:
        logging.getLogger("vocaplan").setLevel(logging.DEBUG)
        logger.debug(f"vocaplan v{VERSION}")


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _fail(message: str) -> typer.Exit:
    typer.secho(message, fg="red", err=True)
    return typer.Exit(1)


def _config() -> EngineSettings:
    try:
        return resolve_config()
    except (ValidationError, ValueError) as e:
        raise _fail(f"Invalid configuration: {e}")


def _records_path(path: Path | None, config: EngineSettings) -> Path:
    resolved = path or config.records_path
    if resolved is None:
        raise _fail("No records file given and 'records_path' is not configured.")
    return resolved


def _load(path: Path) -> RecordStore:
    try:
        return load_store(path)
    except FileNotFoundError:
        raise _fail(f"Records file not found: {path}")
    except (yaml.YAMLError, ValidationError, ValueError) as e:
        raise _fail(f"Invalid records file {path}: {e}")


def _echo_json(payload: Any) -> None:
    typer.echo(json.dumps(payload, indent=2, ensure_ascii=False, default=str))


def _record_summary(record: ReviewRecord) -> dict[str, Any]:
    return {
        "word_id": record.word_id,
        "total_exposures": record.total_exposures,
        "remaining_exposures": record.remaining_exposures,
        "target_exposures": record.target_exposures,
        "average_dwell": round(record.average_dwell, 2),
        "ease_factor": record.ease_factor,
        "interval": record.interval,
        "next_due": record.next_due,
        "phase": record.phase.value,
        "mastery": record.mastery.value,
        "familiarity": familiarity_score(record),
    }


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


@app.command()
def plan(
    words: Annotated[int, typer.Option("--words", "-w", help="Total words in the goal.")] = 3000,
    days: Annotated[int, typer.Option("--days", "-d", help="Plan length in days.")] = 10,
    start: Annotated[
        datetime | None, typer.Option(formats=["%Y-%m-%d"], help="Date of day 1.")
    ] = None,
    first_id: Annotated[int, typer.Option(help="Word id of the first pack entry.")] = 1,
    policy: Annotated[TaskPolicy | None, typer.Option(help="Plan shape.")] = None,
    preset: Annotated[
        str | None, typer.Option(help="standard, intensive or relaxed (quantitative only).")
    ] = None,
    auto: Annotated[
        bool, typer.Option("--auto", help="Pick the plan shape from the plan length.")
    ] = False,
):
    """Generate a complete multi-day plan and print it as JSON."""
    if words < 0 or days <= 0:
        raise _fail("--words must be >= 0 and --days must be > 0.")

    config = _config()
    goal = LearningGoal(
        goal_id=1,
        total_words=words,
        duration_days=days,
        start_date=start.date() if start else date.today(),
    )

    if preset is not None and preset not in PRESETS:
        raise _fail(f"Unknown preset '{preset}'. Choose from: {', '.join(PRESETS)}.")

    if auto and (policy is not None or preset is not None):
        raise _fail("--auto cannot be combined with --policy or --preset.")

    if auto:
        strategy = strategy_for_goal(goal)
    else:
        strategy = build_task_strategy(
            policy or config.task_policy,
            PRESETS[preset] if preset else config.planner_config(),
        )

    pack_entries = list(range(first_id, first_id + words))
    tasks = TaskPlanner(strategy=strategy).generate_complete_plan(goal, pack_entries)

    _echo_json(
        {
            "strategy": strategy.name,
            "description": strategy.description,
            "total_new_words": sum(len(t.new_word_ids) for t in tasks),
            "days": [
                {
                    "day": t.day,
                    "date": t.date.isoformat(),
                    "new_words": len(t.new_word_ids),
                    "first_word_id": t.new_word_ids[0] if t.new_word_ids else None,
                    "last_word_id": t.new_word_ids[-1] if t.new_word_ids else None,
                    "total_exposures": t.total_exposures_planned,
                    "estimated_minutes": t.estimated_minutes,
                }
                for t in tasks
            ],
        }
    )


@app.command()
def analyze(
    path: Annotated[Path | None, typer.Argument(help="Records file (YAML or JSON).")] = None,
    review_count: Annotated[int | None, typer.Option(help="Review candidates to list.")] = None,
    top: Annotated[int, typer.Option(help="Difficult words to resolve to text.")] = 10,
):
    """Rank the day's words by dwell time and classify them."""
    config = _config()
    store = _load(_records_path(path, config))

    analyzer = DwellTimeAnalyzer(config.analyzer_config())
    analysis = analyzer.analyze(store.records)
    trend = analyzer.analyze_trend(store.records)

    try:
        difficult = difficult_words_for_passage(
            analysis, store, count=top, tolerance=config.missing_word_tolerance
        )
    except MissingWordData as e:
        raise _fail(str(e))

    _echo_json(
        {
            "total_words": analysis.total_words,
            "average_dwell": round(analysis.average_dwell, 2),
            "median_dwell": round(analysis.median_dwell, 2),
            "mastery_rate": round(analysis.mastery_rate, 3),
            "difficulty_rate": round(analysis.difficulty_rate, 3),
            "distribution": {band.value: n for band, n in analysis.distribution.items()},
            "review_candidates": analysis.get_words_needing_review(
                review_count if review_count is not None else config.daily_review_count
            ),
            "difficult_words": difficult,
            "trend": trend.description,
        }
    )


@app.command()
def due(
    path: Annotated[Path | None, typer.Argument(help="Records file (YAML or JSON).")] = None,
    limit: Annotated[int | None, typer.Option(help="Maximum ids to return.")] = None,
    now: Annotated[datetime | None, typer.Option(help="Reference time (ISO).")] = None,
):
    """List words due for review, most urgent first."""
    config = _config()
    store = _load(_records_path(path, config))
    now = now or datetime.now()

    selector = ReviewSelector(SpacedRepetitionScheduler())
    ids = selector.due_for_review(store.records, now, limit=limit)
    stats = selector.review_statistics(store.records, now)

    _echo_json(
        {
            "due": ids,
            "words": [store.lookup(i) for i in ids],
            "today": stats.today_count,
            "overdue": stats.overdue_count,
            "upcoming_7_days": stats.upcoming_7_days,
            "upcoming_30_days": stats.upcoming_30_days,
        }
    )


@app.command()
def swipe(
    word_id: Annotated[int, typer.Argument(help="Word that was shown.")],
    direction: Annotated[SwipeDirection, typer.Argument(help="known or unknown.")],
    dwell: Annotated[float, typer.Argument(help="Seconds the card was on screen.")],
    path: Annotated[Path | None, typer.Option("--records", help="Records file.")] = None,
    day: Annotated[int | None, typer.Option(help="Current plan day (adaptive policy).")] = None,
    days: Annotated[int | None, typer.Option(help="Plan length in days (adaptive policy).")] = None,
    now: Annotated[datetime | None, typer.Option(help="Event time (ISO).")] = None,
):
    """Record one swipe, update the word's schedule and save the file."""
    config = _config()
    records_path = _records_path(path, config)
    store = _load(records_path) if records_path.exists() else RecordStore()

    try:
        strategy = build_strategy(
            config.exposure_policy, config.exposure_settings(), current_day=day, total_days=days
        )
    except ValueError as e:
        raise _fail(f"{e} (pass --day and --days)")
    decisions = ExposureDecisionMaker(strategy)

    if word_id not in store.records:
        logger.info(f"Introducing word_id={word_id}")
    record = store.get_or_create(word_id, decisions.assign_initial_exposures(word_id))

    SpacedRepetitionScheduler().record_swipe(record, direction, dwell, now or datetime.now())
    record.set_target(decisions.adjust_exposures(record))

    save_store(records_path, store)

    summary = _record_summary(record)
    summary["continue_exposure"] = not decisions.can_stop_early(record)
    _echo_json(summary)


@app.command()
def report(
    path: Annotated[Path | None, typer.Argument(help="Records file (YAML or JSON).")] = None,
    day: Annotated[int, typer.Option(help="Plan day being reported.")] = 1,
    goal_id: Annotated[int, typer.Option(help="Goal the day belongs to.")] = 1,
    duration: Annotated[float, typer.Option(help="Study time in seconds.")] = 0.0,
):
    """Print the daily report for a records file."""
    config = _config()
    store = _load(_records_path(path, config))

    result = build_daily_report(
        goal_id=goal_id,
        day=day,
        report_date=date.today(),
        records=store.records,
        catalog=store,
        study_duration_seconds=duration,
        analyzer=DwellTimeAnalyzer(config.analyzer_config()),
    )

    _echo_json(
        {
            "day": result.day,
            "words_studied": result.total_words_studied,
            "exposures": result.total_exposures,
            "duration": result.study_duration_formatted,
            "known_swipes": result.right_count,
            "unknown_swipes": result.left_count,
            "average_dwell": round(result.average_dwell, 2),
            "mastery_rate": round(result.mastery_rate, 3),
            "familiar": result.familiar_word_ids,
            "unfamiliar": result.unfamiliar_word_ids,
            "hardest": [
                {
                    "word_id": s.word_id,
                    "word": s.word,
                    "average_dwell": round(s.average_dwell, 2),
                    "swipes": s.swipe_indicator,
                }
                for s in result.top_difficult_words()
            ],
        }
    )


# ---------------------------------------------------------------------------
# Config subgroup
# ---------------------------------------------------------------------------


@config_app.command("show")
def config_show():
    """Display final resolved configuration."""
    config = _config()
    typer.echo(json.dumps(config.model_dump(mode="json"), indent=2))

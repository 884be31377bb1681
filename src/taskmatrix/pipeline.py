"""Pipeline layer shared by the CLI commands.

Builds one fallback chain per logical source from configuration, then runs
acquisition, normalization, merge and summary.
"""

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from datetime import date

from .adapters import (
    CalendarCsvAdapter,
    GoogleCalendarAdapter,
    ManualCalendarAdapter,
    ManualTrelloAdapter,
    MockCalendarAdapter,
    MockTrelloAdapter,
    TrelloAdapter,
)
from .config import Category, Config
from .core.merge import MergedTask, merge
from .core.normalize import normalize_all
from .core.records import SourceKind
from .core.summary import Summary, summarize
from .fallback import AcquisitionResult, acquire
from .ports import RecordSource

logger = logging.getLogger(__name__)

CALENDAR_STRATEGIES = ("service_account", "cached_token", "api_key", "csv", "manual", "mock")
TRELLO_STRATEGIES = ("api", "manual", "mock")


@dataclass
class LogicalSource:
    """One fallback chain, e.g. the Work calendar."""

    name: str
    kind: SourceKind
    strategies: list[RecordSource]
    category: str | None = None


@dataclass
class PipelineResult:
    """Everything one run produced."""

    acquisitions: list[AcquisitionResult] = field(default_factory=list)
    tasks: list[MergedTask] = field(default_factory=list)
    summary: Summary | None = None


def calendar_strategy(strategy: str, config: Config, category: Category, today: date) -> RecordSource:
    """Build one calendar strategy by identifier."""
    match strategy:
        case "service_account" | "cached_token" | "api_key":
            return GoogleCalendarAdapter(
                calendars=category.calendars,
                auth=strategy,
                today=today,
                category=category.name,
                days_back=config.days_back,
                days_forward=config.days_forward,
                service_account_file=config.google_service_account_file,
                token_file=config.google_token_file,
                api_key=config.google_api_key,
                timeout=config.request_timeout,
                timezone=config.timezone,
            )
        case "csv":
            return CalendarCsvAdapter(
                data_dir=config.data_dir,
                calendars=category.calendars,
                today=today,
                category=category.name,
                days_back=config.days_back,
                days_forward=config.days_forward,
            )
        case "manual":
            return ManualCalendarAdapter(
                path=config.manual_calendar_file,
                calendar_names=[c.name for c in category.calendars] if category.name else None,
                category=category.name,
            )
        case "mock":
            name = category.calendars[0].name if category.calendars else "Mock"
            return MockCalendarAdapter(today=today, calendar_name=name, category=category.name)
        case _:
            raise ValueError(f"Unknown calendar strategy '{strategy}' (expected one of {', '.join(CALENDAR_STRATEGIES)})")


def trello_strategy(strategy: str, config: Config, category: Category, today: date) -> RecordSource:
    """Build one Trello strategy by identifier."""
    match strategy:
        case "api":
            return TrelloAdapter(
                api_key=config.trello_api_key,
                token=config.trello_token,
                board_names=category.boards,
                category=category.name,
                include_closed=config.include_closed,
                timeout=config.request_timeout,
            )
        case "manual":
            return ManualTrelloAdapter(
                path=config.manual_trello_file,
                board_names=category.boards,
                category=category.name,
                include_closed=config.include_closed,
            )
        case "mock":
            board = category.boards[0] if category.boards else "Mock Board"
            return MockTrelloAdapter(today=today, board_name=board, category=category.name)
        case _:
            raise ValueError(f"Unknown Trello strategy '{strategy}' (expected one of {', '.join(TRELLO_STRATEGIES)})")


def build_sources(config: Config, today: date) -> list[LogicalSource]:
    """
    Build calendar and Trello fallback chains for each configured category.

    Raises ValueError for unknown strategy identifiers.
    """
    sources = []
    for category in config.categories():
        label = f"{category.name} " if category.name else ""
        if category.calendars:
            sources.append(
                LogicalSource(
                    name=f"{label}calendar",
                    kind=SourceKind.CALENDAR,
                    strategies=[calendar_strategy(s, config, category, today) for s in config.calendar_strategies],
                    category=category.name,
                )
            )
        if category.boards is None or category.boards:
            sources.append(
                LogicalSource(
                    name=f"{label}trello",
                    kind=SourceKind.TASK_CARD,
                    strategies=[trello_strategy(s, config, category, today) for s in config.trello_strategies],
                    category=category.name,
                )
            )
    return sources


def run_pipeline(
    sources: Sequence[LogicalSource],
    keyword_filter: Iterable[str],
    today: date,
) -> PipelineResult:
    """
    Acquire every logical source, then normalize, merge and summarize.

    A source whose strategies all fail contributes an empty table; the run
    itself never fails on acquisition errors.
    """
    keywords = tuple(keyword_filter)
    result = PipelineResult()
    tables = []

    for source in sources:
        acquisition = acquire(source.name, source.strategies)
        result.acquisitions.append(acquisition)

        normalized = normalize_all(acquisition.records, source.kind, keywords, today)
        logger.info(f"{source.name}: kept {len(normalized)} of {len(acquisition.records)} records")
        tables.append(normalized)

    result.tasks = merge(tables)
    result.summary = summarize(result.tasks)
    if not result.tasks:
        logger.warning("No tasks after merge - check source configuration")
    return result


def run_from_config(config: Config, today: date | None = None) -> PipelineResult:
    """Build sources from configuration and run the pipeline."""
    today = today or date.today()
    return run_pipeline(build_sources(config, today), config.keyword_filter, today)

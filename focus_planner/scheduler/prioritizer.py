"""
Priority scoring algorithm for Focus Planner.

Picks the work item(s) that deserve attention right now and explains why.

Score formula:
    score = (time_energy * 0.25) + (deadline_urgency * 0.30) + (momentum * 0.15)
            + (priority * 0.20) + (dependency * 0.10)
"""

import logging
from datetime import datetime
from typing import Dict, List, Optional, Sequence
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from focus_planner.core.config import Config, FallbackMode
from focus_planner.core.models import RankedEntry, ScoreBreakdown, ScoringContext, WorkItem
from focus_planner.scheduler.justification import (
    DEFAULT_MAX_CLAUSES,
    DEFAULT_SEPARATOR,
    generate_justification,
)
from focus_planner.scheduler.signals import (
    score_dependency,
    score_deadline_urgency,
    score_momentum,
    score_priority,
    score_time_energy,
)


logger = logging.getLogger(__name__)

DEFAULT_MAX_CANDIDATES = 500
DEFAULT_FOCUS_COUNT = 2

WEIGHTS: Dict[str, float] = {
    "time_energy": 0.25,
    "deadline_urgency": 0.30,
    "momentum": 0.15,
    "priority": 0.20,
    "dependency": 0.10,
}


def score_breakdown(item: WorkItem, context: ScoringContext) -> ScoreBreakdown:
    """Run the five signal scorers against one item."""
    return ScoreBreakdown(
        time_energy=score_time_energy(item, context),
        deadline_urgency=score_deadline_urgency(item, context),
        momentum=score_momentum(item, context),
        priority=score_priority(item, context),
        dependency=score_dependency(item, context),
    )


def total_score(breakdown: ScoreBreakdown) -> float:
    """
    Combine sub-scores into a single 0-100 total using the fixed weights.
    """
    score = (
        breakdown.time_energy * WEIGHTS["time_energy"] +
        breakdown.deadline_urgency * WEIGHTS["deadline_urgency"] +
        breakdown.momentum * WEIGHTS["momentum"] +
        breakdown.priority * WEIGHTS["priority"] +
        breakdown.dependency * WEIGHTS["dependency"]
    )

    # Clamp to valid range
    return max(0.0, min(100.0, score))


class Prioritizer:
    """
    Focus selection engine.

    Scores open work items on time/energy fit, deadline urgency, momentum,
    stated priority and dependency pressure, and returns the best ones with
    a short justification. Holds only read-only configuration, so a single
    instance can be shared.
    """

    # Weight factors for score components
    TIME_ENERGY_WEIGHT = WEIGHTS["time_energy"]
    DEADLINE_URGENCY_WEIGHT = WEIGHTS["deadline_urgency"]
    MOMENTUM_WEIGHT = WEIGHTS["momentum"]
    PRIORITY_WEIGHT = WEIGHTS["priority"]
    DEPENDENCY_WEIGHT = WEIGHTS["dependency"]

    def __init__(
        self,
        config: Optional[Config] = None,
        fallback_mode: Optional[FallbackMode] = None
    ):
        """
        Initialize prioritizer.

        Args:
            config: Configuration for fallback mode, candidate cap, timezone and
                justification formatting (built-in defaults if None)
            fallback_mode: Overrides the configured fallback mode
        """
        self.config = config

        if config is not None:
            self.fallback_mode = fallback_mode or config.get_fallback_mode()
            self.max_candidates = int(config.get("max_candidates", "settings", DEFAULT_MAX_CANDIDATES))
            self.separator = config.get("justification_separator", "preferences", DEFAULT_SEPARATOR)
            self.max_clauses = int(config.get("max_justification_clauses", "preferences", DEFAULT_MAX_CLAUSES))
            self.focus_count = int(config.get("focus_count", "preferences", DEFAULT_FOCUS_COUNT))
            self.timezone = self._load_timezone(config.get("timezone", "settings"))
        else:
            self.fallback_mode = fallback_mode or FallbackMode.RANKED
            self.max_candidates = DEFAULT_MAX_CANDIDATES
            self.separator = DEFAULT_SEPARATOR
            self.max_clauses = DEFAULT_MAX_CLAUSES
            self.focus_count = DEFAULT_FOCUS_COUNT
            self.timezone = None

    @staticmethod
    def _load_timezone(name: Optional[str]) -> Optional[ZoneInfo]:
        if not name:
            return None
        try:
            return ZoneInfo(name)
        except (ZoneInfoNotFoundError, ValueError):
            logger.warning("Unknown timezone '%s', using clock readings as given", name)
            return None

    def local_time(self, now: datetime) -> datetime:
        """
        Express a clock reading in the configured timezone.

        Naive readings are taken to be local wall-clock time already and are
        returned unchanged, as are all readings when no timezone is set.
        """
        if self.timezone is None or now.tzinfo is None:
            return now
        return now.astimezone(self.timezone)

    def score_item(
        self,
        item: WorkItem,
        now: datetime,
        is_fallback: bool = False
    ) -> RankedEntry:
        """
        Score a single item (no eligibility filtering).

        Args:
            item: Work item to score
            now: Current datetime
            is_fallback: Mark the entry as coming from the fallback path

        Returns:
            RankedEntry with breakdown and justification
        """
        context = ScoringContext.from_datetime(self.local_time(now))
        return self._rank(item, context, is_fallback)

    def _rank(self, item: WorkItem, context: ScoringContext, is_fallback: bool = False) -> RankedEntry:
        breakdown = score_breakdown(item, context)
        return RankedEntry(
            item=item,
            total_score=total_score(breakdown),
            breakdown=breakdown,
            justification=generate_justification(
                item, context, breakdown,
                separator=self.separator,
                max_clauses=self.max_clauses,
            ),
            is_fallback=is_fallback,
        )

    def select_top(
        self,
        items: Sequence[WorkItem],
        now: datetime,
        k: int
    ) -> List[RankedEntry]:
        """
        Select the top K items to focus on right now.

        Only open items with at least one collaborator are candidates. When
        none qualify, all open items are considered instead (see
        FallbackMode). Ties keep input order.

        Args:
            items: Work item snapshot
            now: Current datetime
            k: Number of entries to return

        Returns:
            Ranked entries, highest score first; empty if nothing qualifies
        """
        if k <= 0:
            return []

        if len(items) > self.max_candidates:
            logger.warning(
                "Candidate pool of %d items exceeds cap of %d; truncating",
                len(items), self.max_candidates
            )
            items = items[:self.max_candidates]

        context = ScoringContext.from_datetime(self.local_time(now))

        eligible = [item for item in items if item.is_eligible()]
        if eligible:
            logger.debug("Scoring %d eligible of %d items", len(eligible), len(items))
            return self._rank_all(eligible, context, k)

        open_items = [item for item in items if not item.completed]
        if not open_items:
            logger.debug("No open items to suggest")
            return []

        logger.debug(
            "No collaborative items; falling back (%s) over %d open items",
            self.fallback_mode.value, len(open_items)
        )
        if self.fallback_mode == FallbackMode.SINGLE:
            return [self._rank(open_items[0], context, is_fallback=True)]
        return self._rank_all(open_items, context, k, is_fallback=True)

    def _rank_all(
        self,
        items: Sequence[WorkItem],
        context: ScoringContext,
        k: int,
        is_fallback: bool = False
    ) -> List[RankedEntry]:
        scored = [self._rank(item, context, is_fallback) for item in items]

        # Sort by score (descending); list.sort is stable so ties keep input order
        scored.sort()

        return scored[:k]

    def get_top_priorities(
        self,
        items: Sequence[WorkItem],
        now: datetime,
        n: Optional[int] = None
    ) -> List[RankedEntry]:
        """
        Get the top N items for the "what should I be doing now" card.

        Args:
            items: Work item snapshot
            now: Current datetime
            n: Number of entries (defaults to the configured focus count)

        Returns:
            List of top N RankedEntry objects
        """
        return self.select_top(items, now, self.focus_count if n is None else n)

    def select_top_priority(
        self,
        items: Sequence[WorkItem],
        now: datetime
    ) -> Optional[RankedEntry]:
        """
        Select the single item to work on right now.

        Returns:
            Best RankedEntry, or None if nothing qualifies
        """
        top = self.select_top(items, now, 1)
        return top[0] if top else None


def select_top(
    items: Sequence[WorkItem],
    now: datetime,
    k: int,
    fallback_mode: FallbackMode = FallbackMode.RANKED
) -> List[RankedEntry]:
    """Rank items with default settings. See Prioritizer.select_top."""
    return Prioritizer(fallback_mode=fallback_mode).select_top(items, now, k)

"""
Feedback System - Collects reviewer feedback on generated assets and
summarizes it over a rolling window.
"""
import json
import math
from collections import Counter
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any, List, Optional
import structlog
from pydantic import ValidationError

from asset_factory.config.defaults import (
    FEEDBACK_RETENTION, FEEDBACK_SUMMARY_DAYS, FEEDBACK_TOP_ISSUES,
)
from asset_factory.models import (
    FeedbackEntry, FeedbackOutcome, FeedbackSummary, IssueCount,
)
from asset_factory.utils import FEEDBACK_PATH

logger = structlog.get_logger()


# ============================================================================
# STORAGE
# ============================================================================

class FeedbackStore:
    """Persistence for the feedback log. The base store keeps nothing."""

    def load(self) -> List[FeedbackEntry]:
        return []

    def save(self, entries: List[FeedbackEntry]) -> None:
        pass


class JsonFeedbackStore(FeedbackStore):
    """
    Keeps the most recent entries in a JSON file.

    Stored records that fail validation are skipped on load and written
    back unchanged on save. A file that cannot be parsed at all is moved
    aside to ``<name>.corrupt`` before anything new is written.
    """

    def __init__(self, path: Path, retention: int = FEEDBACK_RETENTION):
        self.path = Path(path)
        self.retention = retention
        self.rejected: List[Any] = []
        self.writable = True

    def load(self) -> List[FeedbackEntry]:
        self.rejected = []
        if not self.path.exists():
            return []
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
            records = data.get("feedback_log", []) if isinstance(data, dict) else None
            if not isinstance(records, list):
                raise ValueError("feedback_log must be a list")
        except (OSError, ValueError) as e:
            logger.error("feedback_load_failed", path=str(self.path), error=str(e))
            self._set_aside()
            return []

        entries: List[FeedbackEntry] = []
        for index, record in enumerate(records):
            try:
                entries.append(FeedbackEntry.model_validate(record))
            except ValidationError as e:
                logger.warning(
                    "feedback_entry_skipped",
                    path=str(self.path),
                    index=index,
                    errors=e.error_count()
                )
                self.rejected.append(record)
        return entries

    def _set_aside(self) -> None:
        backup = self.path.with_name(self.path.name + ".corrupt")
        try:
            self.path.replace(backup)
        except OSError as e:
            # The unreadable file stays where it is and is never overwritten
            self.writable = False
            logger.error("feedback_set_aside_failed", path=str(self.path), error=str(e))
            return
        logger.warning("feedback_file_set_aside", path=str(self.path), backup=str(backup))

    def save(self, entries: List[FeedbackEntry]) -> None:
        if not self.writable:
            logger.error("feedback_save_skipped", path=str(self.path))
            return
        kept = entries[-self.retention:]
        payload = {
            "feedback_log": self.rejected + [e.model_dump(mode="json") for e in kept]
        }
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
        except OSError as e:
            logger.error("feedback_save_failed", path=str(self.path), error=str(e))


def round_half_up(value: float, digits: int = 0) -> float:
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


def default_store() -> FeedbackStore:
    if FEEDBACK_PATH is not None:
        return JsonFeedbackStore(FEEDBACK_PATH)
    return FeedbackStore()


# ============================================================================
# FEEDBACK SYSTEM
# ============================================================================

class FeedbackSystem:
    """
    Append-only feedback log with windowed summaries.
    """

    def __init__(
        self,
        store: Optional[FeedbackStore] = None,
        retention: int = FEEDBACK_RETENTION
    ):
        self.store = store or default_store()
        self.retention = retention
        self.feedback_log: List[FeedbackEntry] = self.store.load()[-retention:]

    def submit(self, entry: FeedbackEntry) -> None:
        """Append an entry and persist the log. Only the newest ``retention`` entries are kept."""
        self.feedback_log.append(entry)
        if len(self.feedback_log) > self.retention:
            del self.feedback_log[:-self.retention]
        self.store.save(self.feedback_log)
        logger.info(
            "feedback_submitted",
            asset_id=entry.asset_id,
            outcome=entry.outcome.value,
            rating=entry.overall_rating,
            issues=len(entry.issues)
        )

    def get_summary(
        self,
        days: int = FEEDBACK_SUMMARY_DAYS,
        now: Optional[datetime] = None
    ) -> FeedbackSummary:
        """
        Summarize feedback from the last ``days`` days.

        Args:
            days: Window length, must be positive
            now: End of the window (defaults to the current UTC time)

        Returns:
            FeedbackSummary with outcome counts, average rating and the five
            most common issues
        """
        if days <= 0:
            raise ValueError(f"days must be positive, got {days}")

        period_end = now or datetime.now(timezone.utc)
        if period_end.tzinfo is None:
            period_end = period_end.replace(tzinfo=timezone.utc)
        cutoff = period_end - timedelta(days=days)

        recent = [f for f in self.feedback_log if f.timestamp >= cutoff]
        total = len(recent)

        outcomes = Counter(f.outcome for f in recent)
        approved = outcomes[FeedbackOutcome.APPROVED]

        average_rating = (
            sum(f.overall_rating for f in recent) / total if total else 0.0
        )

        # Counter keeps first-seen order, and most_common() sorts stably
        issue_counter: Counter = Counter()
        for feedback in recent:
            for issue in feedback.issues:
                issue_counter[f"{issue.category.value}: {issue.description}"] += 1

        common_issues = [
            IssueCount(issue=issue, count=count)
            for issue, count in issue_counter.most_common(FEEDBACK_TOP_ISSUES)
        ]

        return FeedbackSummary(
            total_assets=total,
            approved_first_try=approved,
            needed_revision=outcomes[FeedbackOutcome.REVISED],
            rejected=outcomes[FeedbackOutcome.REJECTED],
            approval_rate=round(approved / total, 3) if total else 0.0,
            average_rating=round_half_up(average_rating, 1),
            common_issues=common_issues,
            period_start=cutoff,
            period_end=period_end
        )


# Singleton instance
feedback_system = FeedbackSystem()

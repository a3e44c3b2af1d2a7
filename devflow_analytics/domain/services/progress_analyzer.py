"""
Progress Analyzer

Turns a node set and its event timeline into completion, velocity and
burndown statistics plus a short list of rule-based insights.

Definitions:
    velocity         = completed story points / max(1, window days)
    daily completions= node_completed events in the window, per UTC date
    velocity trend   = trailing mean over at most 3 available days
    burndown         = total work at (now − 30d), then one sample per
                       node_completed event of the whole timeline
    estimate         = now + remaining work / velocity (none if velocity ≤ 0)

Unestimated nodes count as one story point of work. "Now" is supplied by
an injectable clock so results are reproducible.
"""

from __future__ import annotations

import logging
import time
from datetime import datetime, timezone
from typing import Callable, Dict, List, Optional, Sequence

from devflow_analytics.domain.models import (
    Node,
    TimelineEvent,
    TimeRange,
    EventType,
    MS_PER_DAY,
    ProgressSummary,
    ProgressTrends,
    ProgressReport,
    VelocityPoint,
    BurndownPoint,
    Insight,
)


def current_time_ms() -> int:
    return int(time.time() * 1000)


def utc_day(timestamp: int) -> str:
    """Calendar day (YYYY-MM-DD, UTC) of an epoch-millisecond timestamp."""
    return datetime.fromtimestamp(timestamp / 1000, tz=timezone.utc).date().isoformat()


class ProgressAnalyzer:
    """
    Computes progress summaries, trends and insights.

    Args:
        clock: Returns the current time in epoch milliseconds
    """

    TREND_WINDOW_DAYS = 3
    BURNDOWN_LOOKBACK_DAYS = 30
    RECENT_ACTIVITY_DAYS = 3
    LOW_VELOCITY = 1
    HIGH_VELOCITY = 5

    def __init__(self, clock: Callable[[], int] = current_time_ms) -> None:
        self._clock = clock
        self._logger = logging.getLogger(__name__)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def analyze(
        self,
        nodes: Sequence[Node],
        timeline: Sequence[TimelineEvent],
        time_range: Optional[TimeRange] = None,
    ) -> ProgressReport:
        now = self._clock()
        window = (time_range or TimeRange()).resolve(now)

        relevant = [e for e in timeline if window.contains(e.timestamp)]
        completed = [n for n in nodes if n.is_completed]

        total_points = sum(n.work_units for n in nodes)
        completed_points = sum(n.work_units for n in completed)
        velocity = completed_points / window.days

        daily = self.group_by_day(
            [e for e in relevant if e.type == EventType.NODE_COMPLETED.value]
        )

        summary = ProgressSummary(
            total_nodes=len(nodes),
            completed_nodes=len(completed),
            completion_percentage=(len(completed) / len(nodes)) * 100 if nodes else 0.0,
            total_story_points=total_points,
            completed_story_points=completed_points,
            velocity=velocity,
            estimated_completion=self.estimate_completion(nodes, velocity, now),
        )
        trends = ProgressTrends(
            daily_completions=daily,
            velocity_trend=self.velocity_trend(daily),
            burndown_data=self.burndown(nodes, timeline, now),
        )

        self._logger.debug(
            "Progress: %d/%d nodes complete, velocity %.2f over %.1f days",
            len(completed), len(nodes), velocity, window.days,
        )
        return ProgressReport(
            summary=summary,
            trends=trends,
            insights=self.insights(nodes, relevant, velocity, now),
        )

    # ------------------------------------------------------------------
    # Trends
    # ------------------------------------------------------------------

    @staticmethod
    def group_by_day(events: Sequence[TimelineEvent]) -> Dict[str, int]:
        grouped: Dict[str, int] = {}
        for event in events:
            day = utc_day(event.timestamp)
            grouped[day] = grouped.get(day, 0) + 1
        return grouped

    def velocity_trend(self, daily_completions: Dict[str, int]) -> List[VelocityPoint]:
        dates = sorted(daily_completions)
        trend: List[VelocityPoint] = []

        for i, day in enumerate(dates):
            window = dates[max(0, i - self.TREND_WINDOW_DAYS + 1): i + 1]
            average = sum(daily_completions[d] for d in window) / len(window)
            trend.append(VelocityPoint(
                date=day,
                velocity=average,
                completions=daily_completions[day],
            ))

        return trend

    def burndown(
        self,
        nodes: Sequence[Node],
        timeline: Sequence[TimelineEvent],
        now: int,
    ) -> List[BurndownPoint]:
        remaining = sum(n.work_units for n in nodes)
        by_id = {n.id: n for n in nodes}

        completions = sorted(
            (e for e in timeline if e.type == EventType.NODE_COMPLETED.value),
            key=lambda e: e.timestamp,
        )

        points = [BurndownPoint(date=now - self.BURNDOWN_LOOKBACK_DAYS * MS_PER_DAY, remaining=remaining)]
        for event in completions:
            node = by_id.get(event.node_id)
            if node is None:
                continue
            remaining -= node.work_units
            points.append(BurndownPoint(date=event.timestamp, remaining=remaining))

        return points

    @staticmethod
    def estimate_completion(nodes: Sequence[Node], velocity: float, now: int) -> Optional[datetime]:
        if velocity <= 0:
            return None

        remaining = sum(n.work_units for n in nodes if not n.is_completed)
        days_remaining = remaining / velocity
        try:
            return datetime.fromtimestamp((now + days_remaining * MS_PER_DAY) / 1000, tz=timezone.utc)
        except (OverflowError, ValueError, OSError):
            # Beyond the representable calendar
            return None

    # ------------------------------------------------------------------
    # Insights
    # ------------------------------------------------------------------

    def insights(
        self,
        nodes: Sequence[Node],
        events: Sequence[TimelineEvent],
        velocity: float,
        now: int,
    ) -> List[Insight]:
        insights: List[Insight] = []

        if velocity < self.LOW_VELOCITY:
            insights.append(Insight(
                type="velocity",
                severity="warning",
                title="Low Velocity",
                description=f"Current velocity is {velocity:.2f} story points per day",
                suggestion="Consider breaking down large tasks or removing blockers",
            ))
        elif velocity > self.HIGH_VELOCITY:
            insights.append(Insight(
                type="velocity",
                severity="positive",
                title="High Velocity",
                description=f"Excellent velocity of {velocity:.2f} story points per day",
                suggestion="Maintain current momentum and consider taking on additional scope",
            ))

        blocked = [n for n in nodes if n.is_blocked]
        if blocked:
            insights.append(Insight(
                type="blockers",
                severity="warning",
                title="Blocked Tasks",
                description=f"{len(blocked)} tasks are currently blocked",
                suggestion="Review and resolve blockers to improve flow",
            ))

        cutoff = now - self.RECENT_ACTIVITY_DAYS * MS_PER_DAY
        recent = [
            e for e in events
            if e.type == EventType.NODE_COMPLETED.value and e.timestamp > cutoff
        ]
        if not recent:
            insights.append(Insight(
                type="activity",
                severity="warning",
                title="No Recent Completions",
                description=f"No tasks completed in the last {self.RECENT_ACTIVITY_DAYS} days",
                suggestion="Review current tasks and identify any impediments",
            ))

        return insights

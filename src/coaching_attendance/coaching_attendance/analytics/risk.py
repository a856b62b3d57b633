"""Absence-risk classification over a bounded, newest-first status history.

Two rules feed the classification:

- a *streak* rule: the current unbroken run of absences, counted from the most
  recent recorded day, reaches ``streak_threshold``;
- a *frequency* rule: more than ``frequent_threshold`` absences among the
  newest ``week_window`` recorded days (a six-day coaching week).

Both firing is ``CRITICAL``. The ``streak_only`` policy switches the frequency
rule off and is kept for centers that only track continuous absence.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

from ..attendance.model import AbsenteeStats
from ..core.constants import (
    BATCHES,
    FREQUENT_THRESHOLD,
    HISTORY_WINDOW,
    RECENT_PATTERN_LENGTH,
    STREAK_THRESHOLD,
    WEEK_WINDOW,
)
from ..core.enums import AttendanceStatus, RiskType
from ..core.exceptions import ValidationError

POLICY_COMBINED = "combined"
POLICY_STREAK_ONLY = "streak_only"


@dataclass(frozen=True)
class RiskAssessment:
    consecutive_days: int
    weekly_count: int
    risk_type: RiskType

    @property
    def at_risk(self) -> bool:
        return self.risk_type != RiskType.NONE


@dataclass(frozen=True)
class RiskPolicy:
    streak_threshold: int = STREAK_THRESHOLD
    # None disables the frequency rule.
    frequent_threshold: Optional[int] = FREQUENT_THRESHOLD
    week_window: int = WEEK_WINDOW
    history_window: int = HISTORY_WINDOW

    def decide(self, *, streak: int, weekly: int) -> RiskType:
        consecutive = streak >= self.streak_threshold
        frequent = self.frequent_threshold is not None and weekly > self.frequent_threshold

        if consecutive and frequent:
            return RiskType.CRITICAL
        if consecutive:
            return RiskType.CONSECUTIVE
        if frequent:
            return RiskType.FREQUENT
        return RiskType.NONE


DEFAULT_POLICY = RiskPolicy()


def build_policy(
    name: str = POLICY_COMBINED,
    *,
    streak_threshold: int = STREAK_THRESHOLD,
    frequent_threshold: int = FREQUENT_THRESHOLD,
    week_window: int = WEEK_WINDOW,
) -> RiskPolicy:
    """Factory: pick the rule set configured for this deployment."""
    name = (name or POLICY_COMBINED).strip().lower()
    if streak_threshold < 1 or week_window < 1:
        raise ValidationError("Risk thresholds must be positive")

    if name == POLICY_COMBINED:
        return RiskPolicy(
            streak_threshold=int(streak_threshold),
            frequent_threshold=int(frequent_threshold),
            week_window=int(week_window),
        )
    if name == POLICY_STREAK_ONLY:
        return RiskPolicy(streak_threshold=int(streak_threshold), frequent_threshold=None, week_window=int(week_window))
    raise ValidationError(f"Unknown risk policy: {name}")


def _is_absent(status: object) -> bool:
    return status == AttendanceStatus.ABSENT


def consecutive_absences(history: Sequence[AttendanceStatus]) -> int:
    streak = 0
    for status in history:
        if not _is_absent(status):
            break
        streak += 1
    return streak


def weekly_absences(history: Sequence[AttendanceStatus], window: int = WEEK_WINDOW) -> int:
    # Short histories are counted as they are, not padded.
    return sum(1 for status in history[:window] if _is_absent(status))


def classify(history: Sequence[AttendanceStatus], policy: Optional[RiskPolicy] = None) -> RiskAssessment:
    policy = policy or DEFAULT_POLICY
    recent = list(history)[: policy.history_window]

    streak = consecutive_absences(recent)
    weekly = weekly_absences(recent, policy.week_window)
    return RiskAssessment(
        consecutive_days=streak,
        weekly_count=weekly,
        risk_type=policy.decide(streak=streak, weekly=weekly),
    )


@dataclass(frozen=True)
class StudentRisk:
    """Read-model for risk lists and printable risk reports."""

    stats: AbsenteeStats
    assessment: RiskAssessment
    week_window: int = WEEK_WINDOW

    @property
    def student(self):
        return self.stats.student

    @property
    def issue_label(self) -> str:
        a = self.assessment
        if a.risk_type == RiskType.CONSECUTIVE:
            return f"Streak: {a.consecutive_days} Days"
        if a.risk_type == RiskType.FREQUENT:
            return f"Frequent: {a.weekly_count}/{self.week_window} Days"
        if a.risk_type == RiskType.CRITICAL:
            return f"CRITICAL: {a.consecutive_days} Day Streak"
        return "-"

    @property
    def recent_pattern(self) -> str:
        recent = self.stats.recent_statuses[:RECENT_PATTERN_LENGTH]
        return "-".join("A" if _is_absent(s) else "P" for s in recent)


def assess_students(stats: Iterable[AbsenteeStats], policy: Optional[RiskPolicy] = None) -> list[StudentRisk]:
    """Classify every student and keep only those with a risk."""
    policy = policy or DEFAULT_POLICY
    out: list[StudentRisk] = []
    for s in stats:
        assessment = classify(s.recent_statuses, policy)
        if assessment.at_risk:
            out.append(StudentRisk(stats=s, assessment=assessment, week_window=policy.week_window))
    return out


def group_by_batch(risks: Iterable[StudentRisk], batches: Sequence[str] = BATCHES) -> dict[str, list[StudentRisk]]:
    grouped: dict[str, list[StudentRisk]] = {b: [] for b in batches}
    for r in risks:
        grouped.setdefault(r.student.batch, []).append(r)
    return grouped

"""Effects produced by the progression rules and executed by the engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


@dataclass(frozen=True)
class AddPoints:
    amount: int


@dataclass(frozen=True)
class SetLevel:
    level: int


@dataclass(frozen=True)
class SetStreak:
    streak: int
    last_login_date: datetime


@dataclass(frozen=True)
class AwardBadge:
    """Award the badge defined by (requirement, required_amount), if one exists."""

    requirement: str
    required_amount: int


@dataclass(frozen=True)
class LogActivity:
    type: str
    description: str
    points_awarded: int = 0
    metadata: dict[str, Any] = field(default_factory=dict)


Effect = AddPoints | SetLevel | SetStreak | AwardBadge | LogActivity

"""
Runtime results.

A runtime is either a number of minutes, ``Unlimited`` (refill keeps pace
with demand) or ``Not applicable`` (nothing to compute). The three cases are
kept apart so the page can render them differently.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .helpers import round_half_up

UNLIMITED_LABEL = "Unlimited (refill ≥ total demand)"
NOT_APPLICABLE_LABEL = "N/A"


class RuntimeStatus(str, Enum):
    NUMERIC = "numeric"
    UNLIMITED = "unlimited"
    NOT_APPLICABLE = "not_applicable"


def hours_minutes(minutes: float):
    """Split minutes into whole hours and rounded remainder minutes."""
    hours = int(minutes // 60)
    mins = round_half_up(minutes - hours * 60)
    return hours, mins


@dataclass(frozen=True)
class Runtime:
    status: RuntimeStatus
    minutes: Optional[float] = None

    @classmethod
    def numeric(cls, minutes: float) -> "Runtime":
        return cls(RuntimeStatus.NUMERIC, float(minutes))

    @classmethod
    def unlimited(cls) -> "Runtime":
        return cls(RuntimeStatus.UNLIMITED)

    @classmethod
    def not_applicable(cls) -> "Runtime":
        return cls(RuntimeStatus.NOT_APPLICABLE)

    @property
    def is_numeric(self) -> bool:
        return self.status is RuntimeStatus.NUMERIC

    @property
    def label(self) -> str:
        if self.status is RuntimeStatus.UNLIMITED:
            return UNLIMITED_LABEL
        if self.status is RuntimeStatus.NOT_APPLICABLE:
            return NOT_APPLICABLE_LABEL
        hours, mins = hours_minutes(self.minutes)
        return f"{hours}h {mins}m"

    def to_dict(self):
        return {"status": self.status.value, "minutes": self.minutes, "label": self.label}

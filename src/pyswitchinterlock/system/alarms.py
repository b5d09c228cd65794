"""Notifications the core emits for a presentation layer to play or draw."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

from pyswitchinterlock.model.constants import (
    BANNER_DISPLAY_S,
    INTERLOCK_TITLE,
    AlarmConfig,
    StandardAlarms,
)

if TYPE_CHECKING:
    from pyswitchinterlock.model.state import NetworkState
    from pyswitchinterlock.system.interlock import Denied


@dataclass(frozen=True)
class AlarmSignal:
    """A tone to be played once at each offset."""

    frequency_hz: float
    duration_s: float
    gain: float
    offsets_s: tuple[float, ...]

    @classmethod
    def from_config(cls, config: AlarmConfig) -> "AlarmSignal":
        return cls(
            frequency_hz=config.frequency_hz,
            duration_s=config.duration_s,
            gain=config.gain,
            offsets_s=config.offsets_s,
        )

    @property
    def repeat_count(self) -> int:
        return len(self.offsets_s)


@dataclass(frozen=True)
class AlarmBanner:
    """Transient warning shown after an interlock denial."""

    title: str
    text: str
    instruction: str
    display_s: float = BANNER_DISPLAY_S

    @classmethod
    def from_denial(cls, denial: Denied) -> "AlarmBanner":
        return cls(
            title=INTERLOCK_TITLE,
            text=denial.reason,
            instruction=denial.instruction,
        )


def operation_alarm() -> AlarmSignal:
    return AlarmSignal.from_config(StandardAlarms.OPERATION)


def interlock_alarm() -> AlarmSignal:
    return AlarmSignal.from_config(StandardAlarms.INTERLOCK)


class EventKind(str, Enum):
    OPERATED = "operated"
    BULK = "bulk"
    RESET = "reset"
    DENIED = "denied"


@dataclass(frozen=True)
class SwitchingEvent:
    """
    One-way notification delivered to subscribers after an intent.

    Attributes:
        kind: What happened.
        state: Snapshot after the intent (unchanged for denials).
        device_id: Device the intent targeted, if any.
        denial: The denial, for ``EventKind.DENIED``.
        alarm: Tone schedule to play, if any.
        banner: Warning to display, if any.
    """

    kind: EventKind
    state: NetworkState
    device_id: str | None = None
    denial: Denied | None = None
    alarm: AlarmSignal | None = None
    banner: AlarmBanner | None = field(default=None)

"""
Global constants for the switching network.
Device and segment identifiers, kinds, default labels and alarm parameters
are defined here. Anything a collaborator renders (colors, localized
text) belongs to the collaborator, not to this module.
"""
from dataclasses import dataclass
from enum import Enum


class DeviceKind(str, Enum):
    """Kinds of devices that can sit upstream of a segment."""

    SOURCE = "source"
    BREAKER = "breaker"
    DISCONNECTOR = "disconnector"


class ElementKind(str, Enum):
    """How an element is listed in a status report."""

    POWER = "power"  # The source line, always energized
    SWITCH = "switch"  # Breakers and disconnectors
    LINE = "line"  # Downstream segments


class StandardDevices:
    """Device identifiers of the fixed topology, in upstream-to-downstream order."""

    SOURCE = "src"
    DISCONNECTOR_1 = "c1"
    BREAKER_1 = "s1"
    BREAKER_2 = "s2"
    DISCONNECTOR_2 = "c2"


class StandardSegments:
    """Segment identifiers of the fixed topology."""

    SOURCE_LINE = "p1"
    LINE_2 = "p2"
    LINE_3 = "p3"
    LINE_4 = "p4"
    LINE_5 = "p5"


# Order in which elements are listed on a status panel or report
STATUS_ORDER = (
    StandardSegments.SOURCE_LINE,
    StandardDevices.DISCONNECTOR_1,
    StandardSegments.LINE_2,
    StandardDevices.BREAKER_1,
    StandardSegments.LINE_3,
    StandardDevices.BREAKER_2,
    StandardSegments.LINE_4,
    StandardDevices.DISCONNECTOR_2,
    StandardSegments.LINE_5,
)

# Default display names (English). Collaborators may supply their own.
DEVICE_NAMES = {
    StandardDevices.SOURCE: "Source",
    StandardDevices.DISCONNECTOR_1: "Disconnector C1",
    StandardDevices.BREAKER_1: "Breaker S1",
    StandardDevices.BREAKER_2: "Breaker S2",
    StandardDevices.DISCONNECTOR_2: "Disconnector C2",
}

SEGMENT_NAMES = {
    StandardSegments.SOURCE_LINE: "Line P1 (source)",
    StandardSegments.LINE_2: "Line P2",
    StandardSegments.LINE_3: "Line P3",
    StandardSegments.LINE_4: "Line P4",
    StandardSegments.LINE_5: "Line P5",
}

INTERLOCK_TITLE = "Interlock violation"


@dataclass(frozen=True)
class AlarmConfig:
    """
    Audible alarm parameters for one kind of switching feedback.

    Attributes:
        frequency_hz: Tone frequency of a single beep
        duration_s: Length of a single beep in seconds
        gain: Initial volume of the beep (0..1), ramped down over the beep
        offsets_s: Start times of each beep relative to the event, in seconds
    """
    frequency_hz: float
    duration_s: float
    gain: float
    offsets_s: tuple[float, ...]


class StandardAlarms:
    """Alarm configurations for accepted operations and interlock denials."""

    OPERATION = AlarmConfig(
        frequency_hz=800.0,
        duration_s=0.2,
        gain=0.3,
        offsets_s=(0.0,)
    )

    INTERLOCK = AlarmConfig(
        frequency_hz=800.0,
        duration_s=0.2,
        gain=0.3,
        offsets_s=(0.0, 0.2, 0.4)
    )


BANNER_DISPLAY_S = 3.0  # seconds a denial banner stays visible

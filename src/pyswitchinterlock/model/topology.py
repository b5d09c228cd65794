"""
Static description of the switching network.

A topology lists the devices, the segments they feed and the interlock
table. It is built once and never changes; the positions of the devices
live in ``NetworkState``.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from pyswitchinterlock.exceptions import TopologyError
from pyswitchinterlock.model.constants import (
    DEVICE_NAMES,
    SEGMENT_NAMES,
    DeviceKind,
    StandardDevices,
    StandardSegments,
)


@dataclass(frozen=True)
class Device:
    """
    A switching device or the power source.

    Attributes:
        id: Unique identifier (e.g., "s1").
        kind: Source, breaker or disconnector.
        name: Human-readable name (e.g., "Breaker S1").
    """

    id: str
    kind: DeviceKind
    name: str = ""

    @property
    def is_source(self) -> bool:
        return self.kind == DeviceKind.SOURCE


@dataclass(frozen=True)
class Segment:
    """
    A line segment energized when every upstream device is engaged.

    Attributes:
        id: Unique identifier (e.g., "p3").
        upstream: Device ids from the source down to this segment.
        name: Human-readable name.
    """

    id: str
    upstream: tuple[str, ...]
    name: str = ""


@dataclass(frozen=True)
class InterlockRule:
    """
    A guarded device may not change position while its guard device
    is in the blocking position. The guard itself is not restricted.

    Attributes:
        guarded: Device id that the rule protects.
        guard: Device id whose position is checked.
        blocking_value: Guard position that blocks the guarded device.
    """

    guarded: str
    guard: str
    blocking_value: bool = True


@dataclass(frozen=True)
class Topology:
    """
    Immutable network layout: devices, segments and interlock table.

    Raises:
        TopologyError: If ids collide, there is not exactly one source,
            or a segment or rule references an unknown device.
    """

    devices: tuple[Device, ...]
    segments: tuple[Segment, ...]
    interlocks: tuple[InterlockRule, ...] = field(default_factory=tuple)

    def __post_init__(self):
        device_ids = [d.id for d in self.devices]
        segment_ids = [s.id for s in self.segments]
        all_ids = device_ids + segment_ids
        duplicates = sorted({i for i in all_ids if all_ids.count(i) > 1})
        if duplicates:
            raise TopologyError(f"Duplicate element ids: {duplicates}")

        sources = [d.id for d in self.devices if d.is_source]
        if len(sources) != 1:
            raise TopologyError(
                f"Topology needs exactly one source device, found {sources}"
            )

        known = set(device_ids)
        for seg in self.segments:
            missing = [d for d in seg.upstream if d not in known]
            if missing:
                raise TopologyError(
                    f"Segment '{seg.id}' references unknown devices: {missing}"
                )

        for rule in self.interlocks:
            for dev_id in (rule.guarded, rule.guard):
                if dev_id not in known:
                    raise TopologyError(
                        f"Interlock {rule.guarded}/{rule.guard} references "
                        f"unknown device '{dev_id}'"
                    )
            if rule.guarded == rule.guard:
                raise TopologyError(f"Device '{rule.guard}' cannot guard itself")

    @property
    def source_id(self) -> str:
        return next(d.id for d in self.devices if d.is_source)

    @property
    def device_ids(self) -> list[str]:
        return [d.id for d in self.devices]

    @property
    def switching_device_ids(self) -> list[str]:
        """Ids of every device except the source."""
        return [d.id for d in self.devices if not d.is_source]

    def get_device(self, device_id: str) -> Device | None:
        for d in self.devices:
            if d.id == device_id:
                return d
        return None

    def get_segment(self, segment_id: str) -> Segment | None:
        for s in self.segments:
            if s.id == segment_id:
                return s
        return None

    def rules_for(self, device_id: str) -> list[InterlockRule]:
        """Interlock rules guarding ``device_id``, in table order."""
        return [r for r in self.interlocks if r.guarded == device_id]

    def display_name(self, element_id: str) -> str:
        element = self.get_device(element_id) or self.get_segment(element_id)
        if element is None or not element.name:
            return element_id
        return element.name


def create_standard_topology() -> Topology:
    """
    Build the fixed series arrangement.

    The source heads every upstream list, then C1, S1, S2 and C2 in line
    order, so each segment's condition is the previous segment's condition
    AND the next device. C1 is interlocked against S1.

    Returns:
        Topology: One source, four switching devices, five segments
        and one interlock rule.
    """
    d = StandardDevices
    s = StandardSegments

    devices = (
        Device(d.SOURCE, DeviceKind.SOURCE, DEVICE_NAMES[d.SOURCE]),
        Device(d.DISCONNECTOR_1, DeviceKind.DISCONNECTOR, DEVICE_NAMES[d.DISCONNECTOR_1]),
        Device(d.BREAKER_1, DeviceKind.BREAKER, DEVICE_NAMES[d.BREAKER_1]),
        Device(d.BREAKER_2, DeviceKind.BREAKER, DEVICE_NAMES[d.BREAKER_2]),
        Device(d.DISCONNECTOR_2, DeviceKind.DISCONNECTOR, DEVICE_NAMES[d.DISCONNECTOR_2]),
    )

    line_order = [dev.id for dev in devices]
    segment_ids = (s.SOURCE_LINE, s.LINE_2, s.LINE_3, s.LINE_4, s.LINE_5)
    segments = tuple(
        Segment(seg_id, tuple(line_order[: i + 1]), SEGMENT_NAMES[seg_id])
        for i, seg_id in enumerate(segment_ids)
    )

    interlocks = (
        InterlockRule(guarded=d.DISCONNECTOR_1, guard=d.BREAKER_1, blocking_value=True),
    )

    return Topology(devices=devices, segments=segments, interlocks=interlocks)

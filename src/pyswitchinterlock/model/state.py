"""
Typed state for the switching network.

Device positions and derived segment flags are kept in two separate
mappings. Segment flags are always recomputed from the positions and are
never written directly.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from pyswitchinterlock.model.topology import Topology, create_standard_topology

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NetworkState:
    """
    Immutable snapshot of the network.

    Both mappings are read-only views over private copies, so a snapshot
    handed to a caller cannot be edited.

    Attributes:
        devices: Position per device id (True = engaged, False = released)
        segments: Energized flag per segment id, derived from ``devices``
    """

    devices: Mapping[str, bool] = field(default_factory=dict)
    segments: Mapping[str, bool] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "devices", MappingProxyType(dict(self.devices)))
        object.__setattr__(self, "segments", MappingProxyType(dict(self.segments)))

    def is_engaged(self, device_id: str) -> bool:
        return self.devices[device_id]

    def is_energized(self, segment_id: str) -> bool:
        return self.segments[segment_id]

    def to_dict(self) -> dict[str, Any]:
        """Convert to plain dictionaries for a rendering collaborator."""
        return {
            "devices": dict(self.devices),
            "segments": dict(self.segments),
        }

    @classmethod
    def from_dict(
        cls, d: dict[str, Any], topology: Topology | None = None
    ) -> "NetworkState":
        """
        Rebuild a snapshot from exported device positions.

        Segment flags in ``d`` are ignored and derived again.

        Raises:
            KeyError: If a device of the topology is missing from ``d``.
        """
        topology = topology or create_standard_topology()
        return build_state(topology, d["devices"])


def compute_segment_states(
    topology: Topology, positions: dict[str, bool]
) -> dict[str, bool]:
    """
    Derive every segment's energized flag from device positions.

    Each segment is the logical AND of its upstream devices. The result is
    rebuilt from scratch on every call; nothing is cached between calls.

    Args:
        topology: The network layout.
        positions: Position of every device in the topology.

    Returns:
        dict: Energized flag per segment id, in topology order.
    """
    segments = {
        seg.id: all(positions[dev_id] for dev_id in seg.upstream)
        for seg in topology.segments
    }
    logger.debug("Recomputed segments: %s", segments)
    return segments


def build_state(topology: Topology, positions: dict[str, bool]) -> NetworkState:
    """Create a consistent snapshot from a copy of ``positions``."""
    devices = {dev_id: positions[dev_id] for dev_id in topology.device_ids}
    return NetworkState(
        devices=devices, segments=compute_segment_states(topology, devices)
    )


def initial_positions(topology: Topology) -> dict[str, bool]:
    """Source engaged, every switching device released."""
    return {d.id: d.is_source for d in topology.devices}


def create_initial_state(topology: Topology) -> NetworkState:
    """
    Create the startup snapshot for a topology.

    Returns:
        NetworkState: Only segments fed by the source alone are energized.
    """
    return build_state(topology, initial_positions(topology))

"""
Network model: the single owner and writer of device positions.

Every public operation holds the model's lock, applies its writes and
recomputes all segments before returning, so callers only ever see a
consistent ``NetworkState``.
"""

import logging
import threading

from pyswitchinterlock.exceptions import UnknownDeviceError
from pyswitchinterlock.model.state import (
    NetworkState,
    build_state,
    initial_positions,
)
from pyswitchinterlock.model.topology import Topology, create_standard_topology

logger = logging.getLogger(__name__)


class NetworkModel:
    """
    Holds the authoritative device positions for one session.

    Interlocks are not consulted here; ``SwitchingController`` checks them
    before calling ``set_device_state``.

    Args:
        topology: Network layout. Defaults to the standard topology.
    """

    def __init__(self, topology: Topology | None = None):
        self.topology = topology or create_standard_topology()
        self.lock = threading.RLock()
        self._positions = initial_positions(self.topology)
        self._state = build_state(self.topology, self._positions)

    def _require_device(self, device_id: str) -> None:
        if device_id not in self._positions:
            raise UnknownDeviceError(device_id, self.topology.device_ids)

    def _recompute(self) -> NetworkState:
        self._state = build_state(self.topology, self._positions)
        return self._state

    def get_device_state(self, device_id: str) -> bool:
        """
        Return the position of a device.

        Raises:
            UnknownDeviceError: If the id is not registered.
        """
        with self.lock:
            self._require_device(device_id)
            return self._positions[device_id]

    def set_device_state(self, device_id: str, value: bool) -> NetworkState:
        """
        Set a device position and return the recomputed snapshot.

        Writing the source device is ignored and logged.

        Raises:
            UnknownDeviceError: If the id is not registered.
        """
        with self.lock:
            self._require_device(device_id)
            if device_id == self.topology.source_id:
                logger.warning("Ignoring write to source device '%s'", device_id)
                return self._state
            self._positions[device_id] = bool(value)
            logger.info(
                "%s: %s", device_id, "engaged" if value else "released"
            )
            return self._recompute()

    def current_positions_state(self) -> NetworkState:
        """Build a new snapshot straight from the live device positions."""
        with self.lock:
            return build_state(self.topology, self._positions)

    def get_network_state(self) -> NetworkState:
        """Return the current read-only snapshot."""
        with self.lock:
            return self._state

    def set_all_devices(self, value: bool) -> NetworkState:
        """
        Move every switching device to ``value`` with one recomputation.

        This bulk operation bypasses the interlock table.
        """
        with self.lock:
            for dev_id in self.topology.switching_device_ids:
                self._positions[dev_id] = bool(value)
            logger.info(
                "All switching devices %s (interlocks bypassed)",
                "engaged" if value else "released",
            )
            return self._recompute()

    def reset(self) -> NetworkState:
        """Restore the startup positions. Bypasses the interlock table."""
        with self.lock:
            self._positions = initial_positions(self.topology)
            logger.info("Network reset to initial state")
            return self._recompute()

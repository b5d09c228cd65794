"""Custom exceptions for PySwitchInterlock."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pyswitchinterlock.model.topology import InterlockRule


class SwitchingError(Exception):
    """
    Raised when a switching operation cannot be carried out.

    None of the subclasses are fatal: the network state is left exactly as
    it was before the operation, and the caller decides how to surface it.
    """

    pass


class UnknownDeviceError(SwitchingError):
    """Raised when an intent references an id outside the topology."""

    def __init__(self, device_id: str, available_devices: list):
        self.device_id = device_id
        self.available_devices = available_devices
        super().__init__(
            f"Device '{device_id}' is not part of the network. "
            f"Available devices: {available_devices}"
        )


class ImmutableDeviceError(SwitchingError):
    """Raised when an operation targets the permanently engaged source."""

    def __init__(self, device_id: str):
        self.device_id = device_id
        super().__init__(
            f"Device '{device_id}' is the power source and is always engaged."
        )


class InterlockViolation(SwitchingError):
    """Raised when a guarded device is operated while its guard blocks it."""

    def __init__(
        self,
        device_id: str,
        blocking_device_id: str,
        rule: InterlockRule,
        reason: str,
        instruction: str = "",
    ):
        self.device_id = device_id
        self.blocking_device_id = blocking_device_id
        self.rule = rule
        self.reason = reason
        self.instruction = instruction
        super().__init__(reason)


class TopologyError(SwitchingError):
    """Raised when a topology definition is inconsistent."""

    pass

"""
Interlock policy.

``check`` is a pure predicate consulted before any device mutation. It
reads a ``NetworkState`` snapshot and never changes it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from pyswitchinterlock.exceptions import (
    ImmutableDeviceError,
    InterlockViolation,
    SwitchingError,
    UnknownDeviceError,
)
from pyswitchinterlock.model.state import NetworkState
from pyswitchinterlock.model.topology import (
    InterlockRule,
    Topology,
    create_standard_topology,
)

logger = logging.getLogger(__name__)


class DenialKind(str, Enum):
    IMMUTABLE_DEVICE = "immutable_device"
    INTERLOCK = "interlock"


@dataclass(frozen=True)
class Allowed:
    """The requested transition may be applied."""

    device_id: str

    @property
    def allowed(self) -> bool:
        return True


@dataclass(frozen=True)
class Denied:
    """
    The requested transition is rejected.

    Attributes:
        kind: Why the request was denied.
        device_id: The device the caller tried to operate.
        reason: Human-readable explanation.
        blocking_device_id: Guard device holding the interlock, if any.
        rule: The interlock rule that was violated, if any.
        instruction: What the operator should do first, if anything.
    """

    kind: DenialKind
    device_id: str
    reason: str
    blocking_device_id: str | None = None
    rule: InterlockRule | None = None
    instruction: str = ""

    @property
    def allowed(self) -> bool:
        return False

    def to_error(self) -> SwitchingError:
        """Return the exception matching this denial."""
        if self.kind == DenialKind.IMMUTABLE_DEVICE:
            return ImmutableDeviceError(self.device_id)
        return InterlockViolation(
            self.device_id,
            self.blocking_device_id,
            self.rule,
            self.reason,
            self.instruction,
        )


CheckResult = Allowed | Denied


def _position_word(value: bool) -> str:
    return "engaged" if value else "released"


def _interlock_denial(
    rule: InterlockRule, topology: Topology
) -> Denied:
    guarded_name = topology.display_name(rule.guarded)
    guard_name = topology.display_name(rule.guard)
    verb = "Release" if rule.blocking_value else "Engage"
    return Denied(
        kind=DenialKind.INTERLOCK,
        device_id=rule.guarded,
        reason=(
            f"{guarded_name} cannot be operated while {guard_name} "
            f"is {_position_word(rule.blocking_value)}."
        ),
        blocking_device_id=rule.guard,
        rule=rule,
        instruction=f"{verb} {guard_name} first.",
    )


def check(
    device_id: str,
    attempted_new_value: bool,
    current_state: NetworkState,
    topology: Topology | None = None,
) -> CheckResult:
    """
    Decide whether ``device_id`` may be moved to ``attempted_new_value``.

    The source device is always denied. A request that does not change the
    device's position is not a transition and is allowed. Otherwise the
    first interlock rule whose guard is in its blocking position denies it.

    Args:
        device_id: Device the caller wants to operate.
        attempted_new_value: Requested position (True = engaged).
        current_state: Snapshot to evaluate against. Not modified.
        topology: Network layout. Defaults to the standard topology.

    Returns:
        Allowed or Denied.

    Raises:
        UnknownDeviceError: If ``device_id`` is not a device of the topology.
    """
    if topology is None:
        topology = create_standard_topology()

    device = topology.get_device(device_id)
    if device is None:
        raise UnknownDeviceError(device_id, topology.device_ids)

    if device.is_source:
        return Denied(
            kind=DenialKind.IMMUTABLE_DEVICE,
            device_id=device_id,
            reason=f"{topology.display_name(device_id)} is always engaged.",
        )

    if current_state.devices[device_id] == attempted_new_value:
        return Allowed(device_id)

    for rule in topology.rules_for(device_id):
        if current_state.devices[rule.guard] == rule.blocking_value:
            logger.debug("Rule %s/%s blocks %s", rule.guarded, rule.guard, device_id)
            return _interlock_denial(rule, topology)

    return Allowed(device_id)

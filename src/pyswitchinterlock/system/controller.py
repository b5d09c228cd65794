"""
Switching controller.

Turns operator intents into checked mutations of a ``NetworkModel``:
interlock check, then mutation, then recomputation, all under the model's
lock. Denials leave the network untouched.

Example:
    >>> ctl = SwitchingController()
    >>> ctl.toggle("c1").segments["p2"]
    True
    >>> outcome = ctl.handle_intent("s1")
    >>> outcome.accepted
    True
    >>> ctl.handle_intent("c1").denial.blocking_device_id
    's1'
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from pyswitchinterlock.exceptions import SwitchingError, UnknownDeviceError
from pyswitchinterlock.model.state import NetworkState
from pyswitchinterlock.system.alarms import (
    AlarmBanner,
    AlarmSignal,
    EventKind,
    SwitchingEvent,
    interlock_alarm,
    operation_alarm,
)
from pyswitchinterlock.system.interlock import CheckResult, Denied, DenialKind, check
from pyswitchinterlock.system.network import NetworkModel

logger = logging.getLogger(__name__)

Listener = Callable[[SwitchingEvent], None]


@dataclass(frozen=True)
class IntentOutcome:
    """
    Result of ``SwitchingController.handle_intent``.

    Attributes:
        accepted: True if the device was operated.
        state: Snapshot after the intent.
        device_id: The id the intent carried.
        denial: Structured denial for immutable or interlocked devices.
        error: The matching exception, also set for unknown ids.
        alarm: Tone schedule the collaborator may play.
        banner: Warning the collaborator may display.
    """

    accepted: bool
    state: NetworkState
    device_id: str
    denial: Denied | None = None
    error: SwitchingError | None = None
    alarm: AlarmSignal | None = None
    banner: AlarmBanner | None = None


class SwitchingController:
    """
    Check-then-act front end over a ``NetworkModel``.

    Args:
        model: Model to drive. A new standard model is created if omitted.
    """

    def __init__(self, model: NetworkModel | None = None):
        self.model = model or NetworkModel()
        self._listeners: list[Listener] = []

    @property
    def topology(self):
        return self.model.topology

    @property
    def state(self) -> NetworkState:
        return self.model.get_network_state()

    def subscribe(self, listener: Listener) -> None:
        """Register a callback invoked with every ``SwitchingEvent``."""
        with self.model.lock:
            self._listeners.append(listener)

    def unsubscribe(self, listener: Listener) -> None:
        with self.model.lock:
            self._listeners.remove(listener)

    def _emit(self, event: SwitchingEvent) -> None:
        with self.model.lock:
            listeners = list(self._listeners)
        for listener in listeners:
            listener(event)

    def _apply(
        self, device_id: str, value: bool | None
    ) -> tuple[CheckResult, NetworkState]:
        # value=None means toggle the current position
        with self.model.lock:
            current = self.model.current_positions_state()
            if value is None:
                value = not self.model.get_device_state(device_id)
            result = check(device_id, value, current, self.topology)
            if isinstance(result, Denied):
                return result, current
            return result, self.model.set_device_state(device_id, value)

    def _denied_event(self, denial: Denied, state: NetworkState) -> SwitchingEvent:
        if denial.kind == DenialKind.INTERLOCK:
            logger.warning(
                "Interlock: %s blocked by %s", denial.device_id, denial.blocking_device_id
            )
            return SwitchingEvent(
                EventKind.DENIED,
                state,
                device_id=denial.device_id,
                denial=denial,
                alarm=interlock_alarm(),
                banner=AlarmBanner.from_denial(denial),
            )
        logger.warning("Ignoring operation on source device '%s'", denial.device_id)
        return SwitchingEvent(
            EventKind.DENIED, state, device_id=denial.device_id, denial=denial
        )

    def _operate(self, device_id: str, value: bool | None) -> SwitchingEvent:
        result, state = self._apply(device_id, value)
        if isinstance(result, Denied):
            return self._denied_event(result, state)
        return SwitchingEvent(
            EventKind.OPERATED, state, device_id=device_id, alarm=operation_alarm()
        )

    def _run(self, device_id: str, value: bool | None) -> NetworkState:
        event = self._operate(device_id, value)
        self._emit(event)
        if event.denial is not None:
            raise event.denial.to_error()
        return event.state

    def request(self, device_id: str, value: bool) -> NetworkState:
        """
        Move a device to ``value`` if the interlock table allows it.

        Returns:
            NetworkState: The recomputed snapshot.

        Raises:
            UnknownDeviceError: If the id is not a device.
            ImmutableDeviceError: If the id is the source device.
            InterlockViolation: If a guard device blocks the transition.
        """
        return self._run(device_id, value)

    def toggle(self, device_id: str) -> NetworkState:
        """Flip a device's position. Raises like ``request``."""
        return self._run(device_id, None)

    def handle_intent(self, device_id: str) -> IntentOutcome:
        """
        Process a click intent from the presentation layer.

        Never raises for unknown, immutable or interlocked devices; the
        outcome carries the rejection instead.
        """
        try:
            event = self._operate(device_id, None)
        except UnknownDeviceError as err:
            logger.warning("Rejected intent for unknown device '%s'", device_id)
            return IntentOutcome(
                accepted=False, state=self.state, device_id=device_id, error=err
            )

        self._emit(event)
        denial = event.denial
        return IntentOutcome(
            accepted=denial is None,
            state=event.state,
            device_id=device_id,
            denial=denial,
            error=denial.to_error() if denial is not None else None,
            alarm=event.alarm,
            banner=event.banner,
        )

    def _bulk(self, kind: EventKind, state: NetworkState) -> NetworkState:
        alarm = operation_alarm() if kind == EventKind.BULK else None
        self._emit(SwitchingEvent(kind, state, alarm=alarm))
        return state

    def engage_all(self) -> NetworkState:
        """Engage every switching device at once. Bypasses interlocks."""
        return self._bulk(EventKind.BULK, self.model.set_all_devices(True))

    def release_all(self) -> NetworkState:
        """Release every switching device at once. Bypasses interlocks."""
        return self._bulk(EventKind.BULK, self.model.set_all_devices(False))

    def reset(self) -> NetworkState:
        """Return to the startup state. Bypasses interlocks."""
        return self._bulk(EventKind.RESET, self.model.reset())

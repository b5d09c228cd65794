"""Unit tests for SwitchingController."""

import threading

import pytest

from pyswitchinterlock import (
    DenialKind,
    EventKind,
    ImmutableDeviceError,
    InterlockViolation,
    SwitchingController,
    UnknownDeviceError,
)
from pyswitchinterlock.model.state import build_state


def test_default_model():
    ctl = SwitchingController()
    assert ctl.state.devices["c1"] is False
    assert ctl.topology.source_id == "src"


def test_toggle_flips_position(controller):
    assert controller.toggle("c1").devices["c1"] is True
    assert controller.toggle("c1").devices["c1"] is False


def test_request_sets_value(controller):
    state = controller.request("s2", True)
    assert state.devices["s2"] is True
    # Same value again is a no-op, not an error
    assert controller.request("s2", True) == state


def test_toggle_interlocked_raises(controller):
    controller.toggle("c1")
    controller.toggle("s1")
    before = controller.state
    with pytest.raises(InterlockViolation) as exc_info:
        controller.toggle("c1")
    assert exc_info.value.blocking_device_id == "s1"
    assert controller.state == before


def test_toggle_source_raises(controller):
    before = controller.state
    with pytest.raises(ImmutableDeviceError):
        controller.toggle("src")
    assert controller.state == before


def test_toggle_unknown_raises(controller):
    with pytest.raises(UnknownDeviceError):
        controller.toggle("p3")


def test_handle_intent_accepted(controller):
    outcome = controller.handle_intent("c1")
    assert outcome.accepted
    assert outcome.device_id == "c1"
    assert outcome.state.segments["p2"] is True
    assert outcome.denial is None
    assert outcome.error is None
    assert outcome.alarm.repeat_count == 1
    assert outcome.banner is None


def test_handle_intent_interlock(controller):
    controller.toggle("c1")
    controller.toggle("s1")
    before = controller.state

    outcome = controller.handle_intent("c1")
    assert not outcome.accepted
    assert outcome.state == before
    assert outcome.denial.kind == DenialKind.INTERLOCK
    assert outcome.denial.blocking_device_id == "s1"
    assert isinstance(outcome.error, InterlockViolation)
    assert outcome.alarm.offsets_s == (0.0, 0.2, 0.4)
    assert outcome.banner.title == "Interlock violation"
    assert outcome.banner.instruction == "Release Breaker S1 first."


def test_handle_intent_source(controller):
    outcome = controller.handle_intent("src")
    assert not outcome.accepted
    assert outcome.denial.kind == DenialKind.IMMUTABLE_DEVICE
    assert isinstance(outcome.error, ImmutableDeviceError)
    assert outcome.alarm is None
    assert outcome.state.devices["src"] is True


def test_handle_intent_unknown_is_distinct(controller, events):
    outcome = controller.handle_intent("bogus")
    assert not outcome.accepted
    assert outcome.denial is None
    assert isinstance(outcome.error, UnknownDeviceError)
    assert outcome.state == controller.state
    assert events == []


def test_events_for_operations(controller, events):
    controller.toggle("c1")
    assert events[-1].kind == EventKind.OPERATED
    assert events[-1].device_id == "c1"
    assert events[-1].state.segments["p2"] is True
    assert events[-1].alarm.repeat_count == 1


def test_events_for_interlock_denial(controller, events):
    controller.toggle("c1")
    controller.toggle("s1")
    with pytest.raises(InterlockViolation):
        controller.toggle("c1")
    event = events[-1]
    assert event.kind == EventKind.DENIED
    assert event.denial.blocking_device_id == "s1"
    assert event.alarm.repeat_count == 3
    assert event.banner.text == event.denial.reason


def test_bulk_operations_bypass_interlock(controller, events):
    controller.toggle("c1")
    controller.toggle("s1")
    # c1 could not be released alone now, but release_all is not interlocked
    state = controller.release_all()
    assert state.devices["c1"] is False
    assert state.devices["s1"] is False
    assert events[-1].kind == EventKind.BULK
    assert events[-1].alarm.repeat_count == 1


def test_engage_all_idempotent(controller):
    assert controller.engage_all() == controller.engage_all()
    assert all(controller.state.segments.values())


def test_reset(controller, initial_state, events):
    controller.engage_all()
    assert controller.reset() == initial_state
    assert events[-1].kind == EventKind.RESET
    assert events[-1].alarm is None


def test_unsubscribe(controller):
    received = []
    controller.subscribe(received.append)
    controller.toggle("s2")
    controller.unsubscribe(received.append)
    controller.toggle("s2")
    assert len(received) == 1


def test_listener_error_propagates_after_commit(controller):
    def broken(event):
        raise RuntimeError("display failed")

    controller.subscribe(broken)
    with pytest.raises(RuntimeError):
        controller.toggle("c1")
    # The mutation itself completed before listeners ran
    assert controller.state.devices["c1"] is True


def test_edited_snapshot_cannot_bypass_interlock(energized_controller):
    snap = energized_controller.state
    with pytest.raises(TypeError):
        snap.devices["s1"] = False  # type: ignore[index]
    with pytest.raises(InterlockViolation):
        energized_controller.toggle("c1")
    assert energized_controller.state.devices["c1"] is True


def test_interlock_checks_live_positions(energized_controller, topology):
    """A stale cached snapshot does not decide the interlock."""
    model = energized_controller.model
    model._state = build_state(
        topology, {"src": True, "c1": True, "s1": False, "s2": True, "c2": True}
    )
    with pytest.raises(InterlockViolation):
        energized_controller.toggle("c1")
    assert model.get_device_state("c1") is True


def test_concurrent_intents_respect_interlock(controller, events):
    def click(device_id, count):
        for _ in range(count):
            controller.handle_intent(device_id)

    def flip_s1(count):
        for _ in range(count):
            controller.toggle("s1")

    threads = (
        [threading.Thread(target=click, args=("c1", 100)) for _ in range(3)]
        + [threading.Thread(target=click, args=("s1", 100)) for _ in range(2)]
        + [threading.Thread(target=flip_s1, args=(100,)) for _ in range(2)]
    )
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(events) == 700
    c1_events = 0
    for event in events:
        d = event.state.devices
        seg = event.state.segments
        assert seg["p2"] == d["c1"]
        assert seg["p3"] == (seg["p2"] and d["s1"])
        assert seg["p5"] == (seg["p4"] and d["c2"])
        if event.device_id == "c1":
            c1_events += 1
            if event.kind == EventKind.OPERATED:
                assert d["s1"] is False
            else:
                assert event.kind == EventKind.DENIED
                assert d["s1"] is True
        else:
            assert event.kind == EventKind.OPERATED
    assert c1_events == 300


def test_subscribe_waits_for_lock(controller):
    received = []
    with controller.model.lock:
        t = threading.Thread(target=controller.subscribe, args=(received.append,))
        t.start()
        t.join(timeout=0.2)
        assert t.is_alive()
    t.join()
    controller.toggle("s2")
    assert len(received) == 1


def test_unsubscribe_waits_for_lock(controller):
    received = []
    controller.subscribe(received.append)
    with controller.model.lock:
        t = threading.Thread(target=controller.unsubscribe, args=(received.append,))
        t.start()
        t.join(timeout=0.2)
        assert t.is_alive()
    t.join()
    controller.toggle("s2")
    assert received == []

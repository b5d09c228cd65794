import logging

import pytest

from pyswitchinterlock import (
    NetworkModel,
    SwitchingController,
    create_initial_state,
    create_standard_topology,
)


@pytest.fixture
def topology():
    return create_standard_topology()


@pytest.fixture
def initial_state(topology):
    return create_initial_state(topology)


@pytest.fixture
def model(topology):
    return NetworkModel(topology)


@pytest.fixture
def controller(model):
    return SwitchingController(model)


@pytest.fixture
def events(controller):
    """
    Fixture that records every SwitchingEvent emitted by ``controller``.
    Usage:
        def test_something(controller, events):
            controller.toggle("c1")
            assert events[-1].kind == EventKind.OPERATED
    """
    received = []
    controller.subscribe(received.append)
    return received


@pytest.fixture
def energized_controller(controller):
    """Controller after engaging c1, s1, s2, c2 one by one."""
    for device_id in ("c1", "s1", "s2", "c2"):
        controller.toggle(device_id)
    return controller


@pytest.fixture(autouse=True)
def _debug_logging(caplog):
    caplog.set_level(logging.DEBUG, logger="pyswitchinterlock")

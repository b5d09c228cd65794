"""
PySwitchInterlock Library.
"""

from .exceptions import (
    ImmutableDeviceError,
    InterlockViolation,
    SwitchingError,
    TopologyError,
    UnknownDeviceError,
)
from .model.constants import (
    STATUS_ORDER,
    AlarmConfig,
    DeviceKind,
    ElementKind,
    StandardAlarms,
    StandardDevices,
    StandardSegments,
)
from .model.state import NetworkState, compute_segment_states, create_initial_state
from .model.topology import (
    Device,
    InterlockRule,
    Segment,
    Topology,
    create_standard_topology,
)
from .system.alarms import AlarmBanner, AlarmSignal, EventKind, SwitchingEvent
from .system.controller import IntentOutcome, SwitchingController
from .system.interlock import Allowed, Denied, DenialKind, check
from .system.network import NetworkModel
from .utils.export_utils import (
    StateLabels,
    StatusRow,
    export_state_to_csv,
    export_state_to_excel,
    status_rows,
)

"""
Export utilities for network status reports.

Builds the rows of a status panel (one per element, in status order) and
writes them to CSV or to an Excel workbook. Label text is supplied by the
caller through ``StateLabels`` so the report can be localized.
"""

import csv
import os
from dataclasses import dataclass

from pyswitchinterlock.model.constants import STATUS_ORDER, ElementKind
from pyswitchinterlock.model.state import NetworkState
from pyswitchinterlock.model.topology import Topology, create_standard_topology


@dataclass(frozen=True)
class StateLabels:
    """Text used for the two positions of switches and the two states of lines."""

    engaged: str = "Engaged"
    released: str = "Released"
    energized: str = "Energized"
    de_energized: str = "De-energized"


@dataclass(frozen=True)
class StatusRow:
    """
    One line of a status report.

    Attributes:
        id: Device or segment id.
        name: Display name.
        kind: Power, switch or line.
        is_on: Engaged for switches, energized for lines.
    """

    id: str
    name: str
    kind: ElementKind
    is_on: bool

    def state_text(self, labels: StateLabels | None = None) -> str:
        labels = labels or StateLabels()
        if self.kind == ElementKind.SWITCH:
            return labels.engaged if self.is_on else labels.released
        return labels.energized if self.is_on else labels.de_energized


def _element_kind(element_id: str, topology: Topology) -> ElementKind:
    if topology.get_device(element_id) is not None:
        return ElementKind.SWITCH
    segment = topology.get_segment(element_id)
    if segment is not None and segment.upstream == (topology.source_id,):
        return ElementKind.POWER
    return ElementKind.LINE


def status_rows(
    state: NetworkState,
    topology: Topology | None = None,
    order: tuple[str, ...] = STATUS_ORDER,
) -> list[StatusRow]:
    """
    Build status rows for every element in ``order``.

    The source device itself has no row; it is represented by the
    segment it feeds directly.

    Raises:
        KeyError: If ``order`` names an element missing from ``state``.
    """
    topology = topology or create_standard_topology()
    rows = []
    for element_id in order:
        kind = _element_kind(element_id, topology)
        if kind == ElementKind.SWITCH:
            is_on = state.devices[element_id]
        else:
            is_on = state.segments[element_id]
        rows.append(
            StatusRow(element_id, topology.display_name(element_id), kind, is_on)
        )
    return rows


def _ensure_parent(filepath: str) -> None:
    os.makedirs(os.path.dirname(os.path.abspath(filepath)), exist_ok=True)


def export_state_to_csv(
    filepath: str,
    state: NetworkState,
    topology: Topology | None = None,
    labels: StateLabels | None = None,
) -> None:
    """
    Exports the network status to a CSV file.

    Args:
        filepath: Path to the CSV file.
        state: Snapshot to report.
        topology: Network layout. Defaults to the standard topology.
        labels: State texts. Defaults to English.
    """
    _ensure_parent(filepath)
    with open(filepath, "w", newline="", encoding="utf-8") as csvfile:
        writer = csv.writer(csvfile)
        writer.writerow(["Id", "Name", "Kind", "State"])
        for row in status_rows(state, topology):
            writer.writerow([row.id, row.name, row.kind.value, row.state_text(labels)])


def export_state_to_excel(
    filepath: str,
    state: NetworkState,
    topology: Topology | None = None,
    labels: StateLabels | None = None,
) -> None:
    """Exports the network status to an ``.xlsx`` workbook (sheet "Status")."""
    from openpyxl import Workbook
    from openpyxl.styles import Alignment, Font, PatternFill

    wb = Workbook()
    ws = wb.active
    ws.title = "Status"

    headers = ["Id", "Name", "Kind", "State"]
    header_font = Font(bold=True)
    header_fill = PatternFill(start_color="D9D9D9", end_color="D9D9D9", fill_type="solid")
    for col, header in enumerate(headers, 1):
        cell = ws.cell(row=1, column=col, value=header)
        cell.font = header_font
        cell.fill = header_fill
        cell.alignment = Alignment(horizontal="left")

    for row_idx, row in enumerate(status_rows(state, topology), 2):
        ws.cell(row=row_idx, column=1, value=row.id)
        ws.cell(row=row_idx, column=2, value=row.name)
        ws.cell(row=row_idx, column=3, value=row.kind.value)
        ws.cell(row=row_idx, column=4, value=row.state_text(labels))

    ws.column_dimensions["A"].width = 8
    ws.column_dimensions["B"].width = 24
    ws.column_dimensions["C"].width = 10
    ws.column_dimensions["D"].width = 16

    _ensure_parent(filepath)
    wb.save(filepath)

"""
Example: walk the feeder through an energize / de-energize sequence.

Shows the interlock refusing to open disconnector C1 under load, and
writes the final status to CSV.
"""

import logging

from pyswitchinterlock import StateLabels, SwitchingController, export_state_to_csv, status_rows


def print_status(state):
    for row in status_rows(state):
        print(f"  {row.name:<20} {row.state_text()}")


def on_event(event):
    if event.banner:
        print(f"!! {event.banner.title}: {event.banner.text} {event.banner.instruction}")
    if event.alarm:
        print(f"   (beep x{event.alarm.repeat_count})")


def main():
    logging.basicConfig(level=logging.INFO)
    ctl = SwitchingController()
    ctl.subscribe(on_event)

    for device_id in ("c1", "s1", "s2", "c2"):
        ctl.handle_intent(device_id)
    print("Energized:")
    print_status(ctl.state)

    # Refused: S1 is still engaged
    outcome = ctl.handle_intent("c1")
    print(f"c1 accepted: {outcome.accepted}")

    ctl.handle_intent("s1")
    ctl.handle_intent("c1")
    print("After opening S1 then C1:")
    print_status(ctl.state)

    labels = StateLabels(engaged="투입", released="개방", energized="급전", de_energized="단전")
    export_state_to_csv("output/status.csv", ctl.state, labels=labels)


if __name__ == "__main__":
    main()

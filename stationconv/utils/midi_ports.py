"""
MIDI output helpers for sending converted dumps to a Station synth.

Requires a mido backend (python-rtmidi by default) for real ports.
"""

import time
from typing import Callable, Iterable, List, Optional

import mido

from stationconv.formats.station.sysex_parser import StationMessage


def list_output_ports() -> List[str]:
    """Names of the available MIDI output ports."""
    return mido.get_output_names()


def find_output_port(port_name: Optional[str] = None) -> Optional[str]:
    """
    Find a MIDI output port by name or return the first available.

    Args:
        port_name: Exact name or case-insensitive substring

    Returns:
        Port name, or None when nothing matches
    """
    ports = list_output_ports()

    if not ports:
        return None

    if port_name:
        if port_name in ports:
            return port_name
        matches = [p for p in ports if port_name.lower() in p.lower()]
        return matches[0] if matches else None

    # Skip loopback ports such as Linux "Midi Through"
    candidates = [p for p in ports if "through" not in p.lower()]
    if not candidates:
        return None

    # Prefer USB MIDI interfaces
    for p in candidates:
        if "midi" in p.lower() or "usb" in p.lower():
            return p

    return candidates[0]


def to_sysex_message(raw: bytes) -> mido.Message:
    """Wrap one F0..F7 message as a mido sysex message (markers stripped)."""
    if not StationMessage(raw).is_complete:
        raise ValueError("Not a complete SysEx message")
    return mido.Message("sysex", data=raw[1:-1])


def send_sysex(
    port_name: str,
    messages: Iterable[bytes],
    delay_ms: int = 50,
    on_sent: Optional[Callable[[int, bytes], None]] = None,
) -> int:
    """
    Send raw SysEx messages to a MIDI output port.

    Args:
        port_name: Output port to open
        messages: Complete F0..F7 messages
        delay_ms: Pause between messages so the synth can store each program
        on_sent: Called with (index, raw) after each message

    Returns:
        Number of messages sent
    """
    sent = 0
    with mido.open_output(port_name) as port:
        for index, raw in enumerate(messages):
            if index > 0 and delay_ms > 0:
                time.sleep(delay_ms / 1000.0)
            port.send(to_sysex_message(raw))
            sent += 1
            if on_sent is not None:
                on_sent(index, raw)
    return sent

"""Test configuration and fixtures."""

import pytest
from pathlib import Path

PROGRAM_SIZE = 128


def build_message(
    family=0x40,
    msg_type=0x01,
    bank_mode=0x01,
    bank=0,
    program=0,
    programs=1,
    manufacturer=(0x00, 0x20, 0x29),
    device_type=0x01,
):
    """Build a Station program dump: 13 header bytes, program data, F7."""
    header = bytes(
        [0xF0, *manufacturer, device_type, family, 0x00, msg_type, bank_mode, 0x00, 0x00, bank, program]
    )
    data = bytes((i * 7 + program) & 0x7F for i in range(PROGRAM_SIZE * programs))
    return header + data + bytes([0xF7])


@pytest.fixture
def make_message():
    """Return the Station message builder."""
    return build_message


@pytest.fixture
def program_dump():
    """A-Station program dump for bank 3, program 7."""
    return build_message(msg_type=0x01, bank_mode=0x01, bank=3, program=7)


@pytest.fixture
def pair_dump():
    """A-Station program pair dump starting at program 10."""
    return build_message(msg_type=0x02, bank_mode=0x00, bank=2, program=10, programs=2)


@pytest.fixture
def current_dump():
    """A-Station current sound (edit buffer) dump."""
    return build_message(msg_type=0x00, bank_mode=0x00)


@pytest.fixture
def astation_file(tmp_path, program_dump, pair_dump):
    """Return path to an A-Station .syx file with two messages."""
    path = tmp_path / "astation.syx"
    path.write_bytes(program_dump + pair_dump)
    return path


@pytest.fixture
def vstation_file(tmp_path):
    """Return path to an already converted dump."""
    path = tmp_path / "vstation.syx"
    path.write_bytes(build_message(family=0x41, bank=1, program=5))
    return path

"""
conftest.py: Shared fixtures and fakes for the tests.

Created on 10/19/26.

Copyright (c) 2026, The CONIX Research Center
All rights reserved.

This source code is licensed under the BSD-3-Clause license found in the
LICENSE file in the root directory of this source tree.
"""

from datetime import datetime, timezone
from struct import pack

import pytest

from motecomm_py.message import AM_DISPATCH_ID, AM_PRINTF_MSG


def am_packet(payload: bytes, am_type: int = AM_PRINTF_MSG, dest=0xFFFF,
              src=1, group=0x22) -> bytes:
    """Build a serial AM packet."""
    return (bytes([AM_DISPATCH_ID]) +
            pack(">HHBBB", dest, src, len(payload), group, am_type) +
            payload)


class FakePhoenix():
    """Phoenix source stand-in that never starts a thread."""

    def __init__(self, description="fake@source"):
        self.description = description
        self.listeners = []
        self.started = False
        self.joined = False
        self.error = None

    def register_packet_listener(self, listener):
        self.listeners.append(listener)

    def start(self):
        self.started = True

    def join(self, timeout=None):
        self.joined = True

    def feed(self, packet):
        for listener in self.listeners:
            listener(packet)

    def __str__(self):
        return self.description


class FakeMoteIF():
    """Mote interface stand-in recording registrations."""

    def __init__(self):
        self.registered = []

    def register_listener(self, template, listener):
        self.registered.append((template, listener))


class FakeSerial():
    """pyserial stand-in serving a fixed byte string."""

    instances = []
    rx_queue = []

    def __init__(self, port=None, baudrate=None, **kwargs):
        self.port = port
        self.baudrate = baudrate
        self.rx_data = FakeSerial.rx_queue.pop(0) if FakeSerial.rx_queue \
            else b''
        self.written = b''
        self.closed = False
        FakeSerial.instances.append(self)

    @property
    def in_waiting(self):
        return len(self.rx_data)

    def read(self, size=1):
        if not self.rx_data:
            raise OSError("device reports readiness to read but returned "
                          "no data")
        data, self.rx_data = self.rx_data[:size], self.rx_data[size:]
        return data

    def write(self, data):
        self.written += data

    def close(self):
        self.closed = True


@pytest.fixture
def fake_serial(monkeypatch):
    """Replace pyserial in the sources module."""
    from motecomm_py import sources
    FakeSerial.instances = []
    FakeSerial.rx_queue = []
    monkeypatch.setattr(sources, "Serial", FakeSerial)
    return FakeSerial


@pytest.fixture
def fixed_time():
    return datetime(2026, 10, 19, 12, 34, 56, 789123, tzinfo=timezone.utc)

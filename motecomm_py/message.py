"""
message.py: Definitions for active messages received from motes.

Created on 10/19/26.

Copyright (c) 2026, The CONIX Research Center
All rights reserved.

This source code is licensed under the BSD-3-Clause license found in the
LICENSE file in the root directory of this source tree.
"""

from struct import calcsize, unpack
from typing import ClassVar, Optional

import numpy as np

AM_DISPATCH_ID = 0x00

# dest, src, length, group, type
SERIAL_AM_HEADER_FORMAT = ">HHBBB"
SERIAL_AM_HEADER_SIZE = calcsize(SERIAL_AM_HEADER_FORMAT)

# Default TOSH_DATA_LENGTH of a TinyOS build
TOSH_DATA_LENGTH = 28

AM_PRINTF_MSG = 100


class Message():
    """Active message with a fixed AM type and a raw payload."""

    AM_TYPE: ClassVar[int] = -1

    def __init__(self, data: bytes = b'', addr: Optional[int] = None,
                 src: Optional[int] = None, group: Optional[int] = None):
        """Initialize the message."""
        self.data = bytes(data)
        self.addr = addr
        self.src = src
        self.group = group

    def am_type(self) -> int:
        """Return the active message type."""
        return self.AM_TYPE

    def data_get(self) -> bytes:
        """Return the raw payload."""
        return self.data

    def clone(self, data: bytes, **kwargs):
        """Create a message of the same kind holding another payload."""
        return type(self)(data, **kwargs)

    def __repr__(self):
        return (f"{type(self).__name__}(am_type={self.am_type()}, "
                f"src={self.src}, addr={self.addr}, data={self.data!r})")


class PrintfMsg(Message):
    """Printf message carrying a fixed size text buffer."""

    AM_TYPE: ClassVar[int] = AM_PRINTF_MSG
    BUFFER_SIZE: ClassVar[int] = TOSH_DATA_LENGTH

    def __init__(self, data: bytes = b'', **kwargs):
        """Initialize the printf message, zero padding the buffer."""
        super().__init__(data, **kwargs)
        buf = self.data[:self.BUFFER_SIZE].ljust(self.BUFFER_SIZE, b'\x00')
        self.buffer = np.frombuffer(buf, dtype=np.uint8)

    @classmethod
    def total_size_buffer(cls) -> int:
        """Return the number of elements in the buffer field."""
        return cls.BUFFER_SIZE

    def get_element_buffer(self, index: int) -> int:
        """Return one byte of the buffer field as an unsigned value."""
        return int(self.buffer[index])

    def get_string_buffer(self) -> str:
        """Return the buffer up to the first NUL byte."""
        raw = self.buffer.tobytes()
        return raw.split(b'\x00', 1)[0].decode("latin-1")


def parse_am_packet(packet: bytes):
    """
    Split a serial AM packet into its header fields and payload.

    Returns None for packets that are not active messages or that are too
    short for the length they announce.
    """
    if len(packet) < 1 + SERIAL_AM_HEADER_SIZE or packet[0] != AM_DISPATCH_ID:
        return None
    dest, src, length, group, am_type = unpack(
        SERIAL_AM_HEADER_FORMAT, packet[1:1 + SERIAL_AM_HEADER_SIZE])
    payload = packet[1 + SERIAL_AM_HEADER_SIZE:]
    if len(payload) < length:
        return None
    return dest, src, group, am_type, payload[:length]

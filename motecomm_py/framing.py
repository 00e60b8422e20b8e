"""
framing.py: Serial frame parser for mote links.

Created on 10/19/26.

Copyright (c) 2026, The CONIX Research Center
All rights reserved.

This source code is licensed under the BSD-3-Clause license found in the
LICENSE file in the root directory of this source tree.
"""

import sys
from enum import Enum, auto
from struct import pack

SYNC_BYTE = 0x7E
ESCAPE_BYTE = 0x7D
ESCAPE_XOR = 0x20

SERIAL_PROTO_ACK = 0x43
SERIAL_PROTO_PACKET_ACK = 0x44
SERIAL_PROTO_PACKET_NOACK = 0x45
SERIAL_PROTO_PACKET_UNKNOWN = 0xFF

# Largest frame accepted before resynchronising, CRC included
SERIAL_MTU = 256 + 8


def crc16(data: bytes, crc: int = 0) -> int:
    """Calculate the CRC-16 (CCITT, poly 0x1021) of a frame."""
    for byte in data:
        crc ^= byte << 8
        for _ in range(8):
            if crc & 0x8000:
                crc = (crc << 1) ^ 0x1021
            else:
                crc <<= 1
            crc &= 0xFFFF
    return crc


def escape(data: bytes) -> bytes:
    """Byte stuff the sync and escape bytes out of a frame body."""
    out = bytearray()
    for byte in data:
        if byte in (SYNC_BYTE, ESCAPE_BYTE):
            out.append(ESCAPE_BYTE)
            out.append(byte ^ ESCAPE_XOR)
        else:
            out.append(byte)
    return bytes(out)


def encode_frame(body: bytes) -> bytes:
    """Add the CRC, byte stuffing and delimiters to a frame body."""
    body = bytes(body) + pack("<H", crc16(body))
    return bytes([SYNC_BYTE]) + escape(body) + bytes([SYNC_BYTE])


def encode_ack(seq: int) -> bytes:
    """Build the frame acknowledging a packet sequence number."""
    return encode_frame(bytes([SERIAL_PROTO_ACK, seq & 0xFF]))


class FrameState(Enum):
    """Serial frame parser state class."""
    FRAME_STATE_SYNC = auto()
    FRAME_STATE_DATA = auto()
    FRAME_STATE_ESCAPE = auto()


class FrameParser():
    """Serial frame parser, fed one byte at a time."""

    def __init__(self):
        """Initialize the serial frame parser class."""
        self.state = FrameState.FRAME_STATE_SYNC
        self.frame_buf = bytearray()

    def reset(self):
        """Drop any partial frame and wait for the next delimiter."""
        self.state = FrameState.FRAME_STATE_SYNC
        self.frame_buf = bytearray()

    def finish_frame(self):
        """Check the CRC of the buffered frame and return its body."""
        frame = bytes(self.frame_buf)
        self.frame_buf = bytearray()
        if len(frame) < 3:
            print(f"Serial: short frame, bytes: {frame!r}", file=sys.stderr)
            return False
        body = frame[:-2]
        received = frame[-2] | (frame[-1] << 8)
        computed = crc16(body)
        if computed != received:
            print(f"Serial: invalid CRC! computed: {computed:#06x}, "
                  f"received: {received:#06x}, bytes: {frame!r}",
                  file=sys.stderr)
            return False
        return body

    def next_byte(self, msg_byte: int):
        """Parse serial frames, returning a frame body once complete."""
        if self.state == FrameState.FRAME_STATE_SYNC:
            if msg_byte == SYNC_BYTE:
                self.frame_buf = bytearray()
                self.state = FrameState.FRAME_STATE_DATA

        elif self.state == FrameState.FRAME_STATE_DATA:
            if msg_byte == SYNC_BYTE:
                # Back to back delimiters open a new frame
                if self.frame_buf:
                    return self.finish_frame()
            elif msg_byte == ESCAPE_BYTE:
                self.state = FrameState.FRAME_STATE_ESCAPE
            else:
                self.frame_buf.append(msg_byte)

        elif self.state == FrameState.FRAME_STATE_ESCAPE:
            if msg_byte == SYNC_BYTE:
                print("Serial: delimiter after escape, resyncing",
                      file=sys.stderr)
                self.frame_buf = bytearray()
                self.state = FrameState.FRAME_STATE_DATA
                return False
            self.frame_buf.append(msg_byte ^ ESCAPE_XOR)
            self.state = FrameState.FRAME_STATE_DATA

        if len(self.frame_buf) > SERIAL_MTU:
            print(f"Serial: frame too long, bytes: {len(self.frame_buf)}",
                  file=sys.stderr)
            self.reset()

        return False

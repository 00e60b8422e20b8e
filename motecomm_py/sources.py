"""
sources.py: Packet sources for serial ports and serial forwarders.

Created on 10/19/26.

Copyright (c) 2026, The CONIX Research Center
All rights reserved.

This source code is licensed under the BSD-3-Clause license found in the
LICENSE file in the root directory of this source tree.
"""

import os
import socket
import sys
from typing import Optional

from serial import Serial

from .framing import (SERIAL_PROTO_PACKET_ACK, SERIAL_PROTO_PACKET_NOACK,
                      FrameParser, encode_ack)
from .phoenix import PhoenixSource
from .platform import UNKNOWN_BAUD_RATE, PlatformRegistry, get_baud_rate

DEFAULT_SOURCE = "sf@localhost:9002"
DEFAULT_SF_PORT = 9002
DEFAULT_SERIAL_BAUD_RATE = 57600

SF_VERSION = b"U "


class SourceError(ValueError):
    """Raised for source strings that cannot be turned into a source."""


class PacketSource():
    """
    Base class of packet sources.

    open() must be called before read_packet(). Each packet is returned
    starting at its dispatch byte, without any link level framing.
    """

    def open(self):
        """Open the underlying connection."""

    def close(self):
        """Close the underlying connection."""

    def read_packet(self) -> bytes:
        """Block until the next packet arrives and return it."""
        raise NotImplementedError


class FramedSource(PacketSource):
    """Packet source reading serial frames off a byte stream."""

    def __init__(self):
        """Initialize the framed source class."""
        self.parser = FrameParser()
        self.pending = b''

    def read_bytes(self) -> bytes:
        """Read at least one byte from the stream."""
        raise NotImplementedError

    def write_bytes(self, data: bytes):
        """Write raw bytes to the stream."""
        raise NotImplementedError

    def open(self):
        """Reset the frame parser for a fresh connection."""
        self.parser.reset()
        self.pending = b''

    def read_frame(self) -> bytes:
        """Block until the next valid frame body is decoded."""
        while True:
            if not self.pending:
                self.pending = self.read_bytes()
            for index, msg_byte in enumerate(self.pending):
                frame = self.parser.next_byte(msg_byte)
                if frame is not False:
                    self.pending = self.pending[index + 1:]
                    return frame
            self.pending = b''

    def read_packet(self) -> bytes:
        """Read frames until one carries a packet, acknowledging it."""
        while True:
            frame = self.read_frame()
            protocol = frame[0]
            if protocol == SERIAL_PROTO_PACKET_NOACK:
                return frame[1:]
            if protocol == SERIAL_PROTO_PACKET_ACK and len(frame) >= 2:
                self.write_bytes(encode_ack(frame[1]))
                return frame[2:]
            print(f"Serial: ignoring frame with protocol {protocol:#04x}",
                  file=sys.stderr)


class SerialSource(FramedSource):
    """Serial port packet source."""

    def __init__(self, dev_path: str, baudrate: int):
        """Initialize the serial port packet source class."""
        super().__init__()
        self.dev_path = dev_path
        self.baudrate = baudrate
        self.serial_instance = None

    def open(self):
        """Open the serial port."""
        super().open()
        self.serial_instance = Serial(port=self.dev_path,
                                      baudrate=self.baudrate)

    def close(self):
        """Close the serial port."""
        if self.serial_instance is not None:
            self.serial_instance.close()
            self.serial_instance = None

    def read_bytes(self) -> bytes:
        """Read whatever is waiting on the serial port, at least a byte."""
        size = max(1, self.serial_instance.in_waiting)
        return self.serial_instance.read(size=size)

    def write_bytes(self, data: bytes):
        """Write to the serial port."""
        self.serial_instance.write(data)

    def __str__(self):
        return f"serial@{self.dev_path}:{self.baudrate}"


class _SocketMixin():
    """Shared TCP handling for socket based sources."""

    host: str
    port: int
    sock: Optional[socket.socket] = None

    def connect(self):
        """Connect to the remote end."""
        self.sock = socket.create_connection((self.host, self.port))

    def close(self):
        """Close the connection."""
        if self.sock is not None:
            self.sock.close()
            self.sock = None

    def recv_some(self) -> bytes:
        """Receive at least one byte."""
        data = self.sock.recv(4096)
        if not data:
            raise ConnectionError(f"{self} closed the connection")
        return data

    def recv_exact(self, size: int) -> bytes:
        """Receive exactly size bytes."""
        data = b''
        while len(data) < size:
            chunk = self.sock.recv(size - len(data))
            if not chunk:
                raise ConnectionError(f"{self} closed the connection")
            data += chunk
        return data


class NetworkSource(_SocketMixin, FramedSource):
    """TCP packet source carrying serial framing."""

    def __init__(self, host: str, port: int):
        """Initialize the network packet source class."""
        super().__init__()
        self.host = host
        self.port = port

    def open(self):
        """Connect and reset the frame parser."""
        FramedSource.open(self)
        self.connect()

    def read_bytes(self) -> bytes:
        return self.recv_some()

    def write_bytes(self, data: bytes):
        self.sock.sendall(data)

    def __str__(self):
        return f"network@{self.host}:{self.port}"


class SFSource(_SocketMixin, PacketSource):
    """Serial forwarder packet source."""

    def __init__(self, host: str, port: int = DEFAULT_SF_PORT):
        """Initialize the serial forwarder packet source class."""
        self.host = host
        self.port = port

    def open(self):
        """Connect and exchange protocol versions."""
        self.connect()
        self.sock.sendall(SF_VERSION)
        version = self.recv_exact(2)
        if version[0] != SF_VERSION[0]:
            self.close()
            raise ConnectionError(f"{self} speaks an unknown protocol "
                                  f"version {version!r}")

    def read_packet(self) -> bytes:
        """Read one length prefixed packet."""
        size = self.recv_exact(1)[0]
        return self.recv_exact(size)

    def __str__(self):
        return f"sf@{self.host}:{self.port}"


def _parse_port(source: str, port_str: str) -> int:
    try:
        return int(port_str)
    except ValueError as error:
        raise SourceError(f"Invalid port in source {source}") from error


def make_source(source: str,
                registry: Optional[PlatformRegistry] = None) -> PacketSource:
    """
    Build a packet source from a source string.

    Recognised forms are serial@<port>[:<baud-or-platform>],
    sf@<host>[:<port>] and network@<host>:<port>.
    """
    kind, sep, args = source.partition("@")
    if not sep or not args:
        raise SourceError(f"Invalid source {source}")

    if kind == "serial":
        dev_path, sep, speed = args.rpartition(":")
        if not sep:
            return SerialSource(args, DEFAULT_SERIAL_BAUD_RATE)
        if speed.isdigit():
            return SerialSource(dev_path, int(speed))
        if registry is None:
            baudrate = get_baud_rate(speed)
        else:
            baudrate = registry.lookup(speed)
        if baudrate == UNKNOWN_BAUD_RATE:
            raise SourceError(f"Unknown platform {speed}")
        return SerialSource(dev_path, baudrate)

    if kind == "sf":
        host, sep, port_str = args.partition(":")
        if not sep:
            return SFSource(host)
        return SFSource(host, _parse_port(source, port_str))

    if kind == "network":
        host, sep, port_str = args.partition(":")
        if not sep:
            raise SourceError(f"Missing port in source {source}")
        return NetworkSource(host, _parse_port(source, port_str))

    raise SourceError(f"Invalid source {source}")


def make_phoenix(source: Optional[str] = None, resurrect: bool = False,
                 registry: Optional[PlatformRegistry] = None):
    """Build a phoenix source, defaulting to MOTECOM or the local SF."""
    if source is None:
        source = os.environ.get("MOTECOM") or DEFAULT_SOURCE
    return PhoenixSource(make_source(source, registry), resurrect=resurrect)

"""
client.py: Print the printf messages sent by a mote.

Created on 10/19/26.

Copyright (c) 2026, The CONIX Research Center
All rights reserved.

This source code is licensed under the BSD-3-Clause license found in the
LICENSE file in the root directory of this source tree.
"""

import sys
from datetime import datetime, timezone
from typing import Callable, Optional, TextIO

from motecomm_py.message import PrintfMsg

SKIPPED_CHARS = ("\x00", "\r")


def utc_now() -> datetime:
    """Return the current time in UTC."""
    return datetime.now(timezone.utc)


def format_timestamp(time: datetime) -> str:
    """Format a time as yyyy/MM/dd HH:mm:ss.SSS in UTC."""
    time = time.astimezone(timezone.utc)
    return (time.strftime("%Y/%m/%d %H:%M:%S") +
            f".{time.microsecond // 1000:03d}")


class PrintfClient():
    """
    Printf message listener.

    Streams the text buffer of every printf message to the output, putting
    a UTC timestamp and a colon in front of each line. The timestamp of a
    line is the receive time of the message holding its first character.
    """

    def __init__(self, mote_if, out: Optional[TextIO] = None,
                 clock: Callable[[], datetime] = utc_now):
        """Initialize the printf client and register it for printf msgs."""
        self.mote_if = mote_if
        self.out = out
        self.clock = clock
        self.awaiting_timestamp = True
        self.mote_if.register_listener(PrintfMsg(), self)

    @property
    def stream(self) -> TextIO:
        """Output stream, stdout unless one was given."""
        return self.out if self.out is not None else sys.stdout

    def message_received(self, to: int, message: PrintfMsg):
        """
        Print the buffer of a printf message.

        NUL and carriage return bytes are dropped before anything else, so
        the timestamp is written right before the next printed character.
        A message holding only dropped bytes prints nothing, and the NUL
        padding after a trailing newline never leaves a bare timestamp.
        """
        # pylint: disable=unused-argument
        time = self.clock()
        stream = self.stream

        for i in range(PrintfMsg.total_size_buffer()):
            next_char = chr(message.get_element_buffer(i))
            if next_char in SKIPPED_CHARS:
                continue

            if self.awaiting_timestamp:
                stream.write(format_timestamp(time))
                stream.write(":")
                self.awaiting_timestamp = False

            stream.write(next_char)
            if next_char == "\n":
                self.awaiting_timestamp = True

        stream.flush()

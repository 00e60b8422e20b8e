"""
phoenix.py: Background packet delivery thread for a packet source.

Created on 10/19/26.

Copyright (c) 2026, The CONIX Research Center
All rights reserved.

This source code is licensed under the BSD-3-Clause license found in the
LICENSE file in the root directory of this source tree.
"""

import sys
import threading
import time
from typing import Callable, List, Optional

RESURRECT_DELAY_S = 2


class PhoenixSource():
    """
    Read packets from a source on a thread and hand them to listeners.

    Listeners are plain callables taking the packet bytes. They are called
    from the reader thread one packet at a time, in arrival order. When the
    source fails the thread either reopens it after a short delay
    (resurrect) or stops and keeps the error in `error`.
    """

    def __init__(self, packet_source, resurrect: bool = False):
        """Initialize the phoenix source."""
        self.packet_source = packet_source
        self.resurrect = resurrect
        self.listeners: List[Callable[[bytes], None]] = []
        self.listeners_lock = threading.Lock()
        self.error: Optional[BaseException] = None
        self.thread = threading.Thread(target=self.run,
                                       name=f"phoenix {packet_source}")
        self.stopping = threading.Event()

    def register_packet_listener(self, listener: Callable[[bytes], None]):
        """Add a packet listener."""
        with self.listeners_lock:
            self.listeners.append(listener)

    def deregister_packet_listener(self, listener: Callable[[bytes], None]):
        """Remove a packet listener."""
        with self.listeners_lock:
            self.listeners.remove(listener)

    @property
    def started(self) -> bool:
        """Assert if the reader thread was started."""
        return self.thread.ident is not None

    def start(self):
        """Start the reader thread."""
        self.thread.start()

    def join(self, timeout: Optional[float] = None):
        """Wait for the reader thread to end."""
        self.thread.join(timeout)

    def shutdown(self):
        """Ask the reader thread to stop after the current packet."""
        self.stopping.set()
        self.packet_source.close()

    def dispatch(self, packet: bytes):
        """Pass a packet to every listener."""
        with self.listeners_lock:
            listeners = list(self.listeners)
        for listener in listeners:
            listener(packet)

    def read_packets(self):
        """Open the source and dispatch packets until it fails."""
        self.packet_source.open()
        try:
            while not self.stopping.is_set():
                self.dispatch(self.packet_source.read_packet())
        finally:
            self.packet_source.close()

    def run(self):
        """Reader thread body."""
        while not self.stopping.is_set():
            try:
                self.read_packets()
            except OSError as error:
                if self.stopping.is_set():
                    break
                print(f"{self} died - {error}", file=sys.stderr)
                if not self.resurrect:
                    self.error = error
                    break
                time.sleep(RESURRECT_DELAY_S)
            # pylint: disable=broad-except
            except Exception as error:
                # Listener failures are never resurrected
                print(f"{self} died - {error!r}", file=sys.stderr)
                self.error = error
                break

    def __str__(self):
        return str(self.packet_source)

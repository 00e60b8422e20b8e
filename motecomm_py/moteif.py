"""
moteif.py: Message level interface to a mote.

Created on 10/19/26.

Copyright (c) 2026, The CONIX Research Center
All rights reserved.

This source code is licensed under the BSD-3-Clause license found in the
LICENSE file in the root directory of this source tree.
"""

import threading
from typing import Dict, List, Tuple

from .message import Message, parse_am_packet


class MoteIF():
    """
    Dispatch packets from a phoenix source to message listeners.

    A listener is any object with a message_received(to, message) method.
    It is registered with a template message whose AM type selects the
    packets it receives; each packet is delivered as a clone of the
    template.
    """

    def __init__(self, phoenix):
        """Initialize the mote interface and start the phoenix source."""
        self.phoenix = phoenix
        self.templates: Dict[int, List[Tuple[Message, object]]] = {}
        self.lock = threading.Lock()
        self.phoenix.register_packet_listener(self.packet_received)
        if not self.phoenix.started:
            self.phoenix.start()

    def register_listener(self, template: Message, listener):
        """Subscribe a listener to messages of the template's AM type."""
        with self.lock:
            self.templates.setdefault(template.am_type(), []).append(
                (template, listener))

    def deregister_listener(self, template: Message, listener):
        """Unsubscribe a listener."""
        with self.lock:
            entries = self.templates.get(template.am_type(), [])
            self.templates[template.am_type()] = [
                entry for entry in entries if entry[1] is not listener]

    def packet_received(self, packet: bytes):
        """Decode an AM packet and hand it to matching listeners."""
        parsed = parse_am_packet(packet)
        if parsed is None:
            return
        dest, src, group, am_type, payload = parsed
        with self.lock:
            entries = list(self.templates.get(am_type, []))
        for template, listener in entries:
            message = template.clone(payload, addr=dest, src=src,
                                     group=group)
            listener.message_received(dest, message)

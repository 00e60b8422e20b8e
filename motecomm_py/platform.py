"""
platform.py: Lazily initialized platform to baud rate registry.

Created on 10/19/26.

Copyright (c) 2026, The CONIX Research Center
All rights reserved.

This source code is licensed under the BSD-3-Clause license found in the
LICENSE file in the root directory of this source tree.
"""

import sys
import threading
from typing import Callable, Dict, Optional

from . import baudrate

UNKNOWN_BAUD_RATE = -1


class PlatformRegistry():
    """
    Mapping from platform name to serial baud rate.

    The mapping is created on first use and filled by the bulk initializer,
    which is given the registry and is expected to call register() for every
    platform it knows. The initializer runs at most once, even when it
    raises, so entries registered afterwards always win over its defaults.
    """

    def __init__(self, initializer: Callable = baudrate.init):
        """Initialize the platform registry."""
        self.initializer = initializer
        self.platforms: Optional[Dict[str, int]] = None
        # Reentrant: the initializer calls register() while we hold it
        self.lock = threading.RLock()

    def _ensure_initialized(self):
        with self.lock:
            if self.platforms is not None:
                return
            self.platforms = {}
            # pylint: disable=broad-except
            try:
                self.initializer(self)
            except Exception:
                print("Failed to initialize baud rates for platforms. "
                      "Serial communication may not work properly.",
                      file=sys.stderr)

    def register(self, name: str, baud_rate: int):
        """Insert or overwrite the baud rate of a platform."""
        with self.lock:
            self._ensure_initialized()
            self.platforms[name] = baud_rate

    def lookup(self, name: str) -> int:
        """Return the baud rate of a platform, or -1 if it is unknown."""
        self._ensure_initialized()
        return self.platforms.get(name, UNKNOWN_BAUD_RATE)


DEFAULT_REGISTRY = PlatformRegistry()


def get_baud_rate(name: str) -> int:
    """Look up a platform in the default registry."""
    return DEFAULT_REGISTRY.lookup(name)


def add_platform(name: str, baud_rate: int):
    """Register a platform in the default registry."""
    DEFAULT_REGISTRY.register(name, baud_rate)

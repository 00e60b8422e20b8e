"""
baudrate.py: Default serial baud rates of known mote platforms.

Created on 10/19/26.

Copyright (c) 2026, The CONIX Research Center
All rights reserved.

This source code is licensed under the BSD-3-Clause license found in the
LICENSE file in the root directory of this source tree.
"""

PLATFORM_BAUD_RATES = {
    "mica": 19200,
    "mica2": 57600,
    "mica2dot": 19200,
    "micaz": 57600,
    "iris": 57600,
    "ucmini": 57600,
    "mulle": 57600,
    "eyesIFX": 57600,
    "telos": 115200,
    "telosb": 115200,
    "tmote": 115200,
    "tinynode": 115200,
    "intelmote2": 115200,
    "shimmer": 115200,
    "shimmer2": 115200,
    "shimmer2r": 115200,
    "span": 115200,
    "epic": 115200,
    "z1": 115200,
}


def init(registry):
    """Register every known platform with the registry."""
    for name, baud_rate in PLATFORM_BAUD_RATES.items():
        registry.register(name, baud_rate)

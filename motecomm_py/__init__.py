"""
__init__.py: Definitions for the mote communication layer.

Created on 10/19/26.

Copyright (c) 2026, The CONIX Research Center
All rights reserved.

This source code is licensed under the BSD-3-Clause license found in the
LICENSE file in the root directory of this source tree.
"""

from .message import Message, PrintfMsg
from .moteif import MoteIF
from .phoenix import PhoenixSource
from .platform import PlatformRegistry, add_platform, get_baud_rate
from .sources import (NetworkSource, PacketSource, SerialSource, SFSource,
                      SourceError, make_phoenix, make_source)

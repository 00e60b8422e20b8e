#!/usr/bin/env python3
"""
printf_client.py: Print the printf output of a mote.

Created on 10/19/26.

Copyright (c) 2026, The CONIX Research Center
All rights reserved.

This source code is licensed under the BSD-3-Clause license found in the
LICENSE file in the root directory of this source tree.
"""

import sys
from typing import List, Optional

from motecomm_py.moteif import MoteIF
from motecomm_py.sources import make_phoenix
from printfclient.client import PrintfClient


def usage():
    """Print the usage string."""
    print("usage: PrintfClient [-comm <source>]", file=sys.stderr)


def main(argv: Optional[List[str]] = None) -> int:
    """Print the printf output of a mote until interrupted."""
    args = sys.argv[1:] if argv is None else argv

    source = None
    # Any other argument count falls through to the default source
    if len(args) == 2:
        if args[0] != "-comm":
            usage()
            return 1
        source = args[1]

    phoenix = make_phoenix(source)
    print(phoenix)
    mote_if = MoteIF(phoenix)
    PrintfClient(mote_if)

    phoenix.join()
    if phoenix.error is not None:
        raise phoenix.error
    return 0


if __name__ == "__main__":
    RES = main()
    sys.exit(RES)

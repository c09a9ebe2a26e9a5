#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# Time-stamp: <2026-10-15 13:26:58 krylon>
#
# /data/code/python/modescan/probe.py
# created on 13. 10. 2026
# (c) 2026 Benjamin Walkenhorst
#
# This file is part of the modescan port scanner. It is distributed under the
# terms of the GNU General Public License 3. See the file LICENSE for details
# or find a copy online at https://www.gnu.org/licenses/gpl-3.0

"""
modescan.probe

(c) 2026 Benjamin Walkenhorst
"""

import socket
from typing import Callable

from modescan import common
from modescan.model import ProbeOutcome

ProbeFunc = Callable[[str, int, float], ProbeOutcome]


def probe_port(addr: str, port: int, timeout: float) -> ProbeOutcome:
    """Attempt a TCP handshake with <addr>:<port> and report how it went.

    A completed handshake means the port is Open, an explicit refusal means it is
    Closed. Silence until the timeout expires, or any other network error, means Filtered.
    """
    try:
        with socket.create_connection((addr, port), timeout=timeout):
            return ProbeOutcome.Open
    except (ConnectionRefusedError, ConnectionResetError):
        return ProbeOutcome.Closed
    except TimeoutError:
        return ProbeOutcome.Filtered
    except OSError as err:
        common.get_logger("probe").debug("%s trying to connect to %s:%d - %s",
                                         err.__class__.__name__,
                                         addr,
                                         port,
                                         err)
        return ProbeOutcome.Filtered


# Local Variables: #
# python-indent: 4 #
# End: #

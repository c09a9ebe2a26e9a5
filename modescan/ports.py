#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# Time-stamp: <2026-10-15 20:13:52 krylon>
#
# /data/code/python/modescan/ports.py
# created on 12. 10. 2026
# (c) 2026 Benjamin Walkenhorst
#
# This file is part of the modescan port scanner. It is distributed under the
# terms of the GNU General Public License 3. See the file LICENSE for details
# or find a copy online at https://www.gnu.org/licenses/gpl-3.0

"""
modescan.ports

(c) 2026 Benjamin Walkenhorst

Turn a ScanMode into the sorted, duplicate-free sequence of ports we are going to probe.
"""

import re
from typing import Final

from modescan.common import ValidationError
from modescan.model import Custom, Full, PortSet, Quick, ScanMode, Standard

port_min: Final[int] = 1
port_max: Final[int] = 65535


class InvalidPortSpec(ValidationError):
    """InvalidPortSpec indicates a port spec (or mode selector) we cannot make sense of."""

    token: str

    def __init__(self, token: str, msg: str) -> None:
        super().__init__(f"Invalid port spec '{token}': {msg}")
        self.token = token


quick_ports: Final[PortSet] = (
    21,    # FTP
    22,    # SSH
    23,    # Telnet
    25,    # SMTP
    53,    # DNS
    80,    # HTTP
    110,   # POP3
    143,   # IMAP
    443,   # HTTPS
    445,   # SMB
    3306,  # MySQL
    3389,  # RDP
    5432,  # PostgreSQL
    8080,  # HTTP-alt
)

standard_ports: Final[PortSet] = (
    20, 21, 22, 23, 25, 53, 69, 79, 80, 88, 110, 111, 113, 123, 135, 137,
    138, 139, 143, 161, 162, 199, 389, 443, 445, 465, 587, 636, 989, 990,
    993, 995, 1025, 1026, 1027, 1433, 1434, 1521, 1723, 2049, 2082, 2083,
    2086, 2087, 2095, 2096, 3128, 3306, 3389, 5432, 5800, 5900, 5901, 6000,
    6001, 6379, 8000, 8008, 8009, 8080, 8081, 8082, 8083, 8084, 8085, 8086,
    8087, 8088, 8089, 8090, 8180, 8181, 8443, 8888, 9090, 9091, 9100, 9999,
    10000, 27017, 32768, 32769, 32770, 32771, 32772, 32773, 32774, 32775,
    32776, 32777, 49152, 49153, 49154, 49155, 49156, 49157, 50000, 50001,
    50002, 50003,
)

full_ports: Final[PortSet] = tuple(range(port_min, port_max + 1))

_single_pat: Final[re.Pattern] = re.compile(r"^([0-9]+)$")
_range_pat: Final[re.Pattern] = re.compile(r"^([0-9]+)\s*-\s*([0-9]+)$")


def _check_port(token: str, raw: str) -> int:
    val: Final[int] = int(raw)
    if not port_min <= val <= port_max:
        raise InvalidPortSpec(token,
                              f"{val} is outside the range {port_min}-{port_max}")
    return val


def parse_spec(spec: str) -> PortSet:
    """Parse a custom port spec like '22,80,443,8000-8100'.

    The spec is either accepted as a whole or rejected with an InvalidPortSpec
    naming the first token that is not acceptable.
    """
    if spec is None or spec.strip() == "":
        raise InvalidPortSpec(spec or "", "No ports specified")

    ports: set[int] = set()

    for part in spec.split(","):
        token: str = part.strip()

        if token == "":
            raise InvalidPortSpec(part, "Empty element in port list")
        if (m := _single_pat.match(token)) is not None:
            ports.add(_check_port(token, m[1]))
        elif (m := _range_pat.match(token)) is not None:
            start: int = _check_port(token, m[1])
            end: int = _check_port(token, m[2])
            if start > end:
                raise InvalidPortSpec(token,
                                      "Start port must be less than or equal to end port")
            ports.update(range(start, end + 1))
        else:
            raise InvalidPortSpec(token, "Not a port number or range")

    return tuple(sorted(ports))


def expand(mode: ScanMode) -> PortSet:
    """Return the canonical port set for the given ScanMode."""
    match mode:
        case Quick():
            return quick_ports
        case Standard():
            return standard_ports
        case Full():
            return full_ports
        case Custom(spec=spec):
            return parse_spec(spec)
        case _:
            raise InvalidPortSpec(str(mode), "Unknown scan mode")


def parse_mode(selector: str) -> ScanMode:
    """Turn a selector (quick | standard | full | custom:<spec>) into a ScanMode."""
    sel: Final[str] = selector.strip()
    kind, sep, rest = sel.partition(":")

    match kind.strip().lower():
        case "quick" if not sep:
            return Quick()
        case "standard" if not sep:
            return Standard()
        case "full" if not sep:
            return Full()
        case "custom" if sep:
            return Custom(spec=rest)
        case _:
            raise InvalidPortSpec(selector, "Unknown scan mode")


# Local Variables: #
# python-indent: 4 #
# End: #

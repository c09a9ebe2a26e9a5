#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# Time-stamp: <2026-10-15 21:47:03 krylon>
#
# /data/code/python/modescan/model.py
# created on 12. 10. 2026
# (c) 2026 Benjamin Walkenhorst
#
# This file is part of the modescan port scanner. It is distributed under the
# terms of the GNU General Public License 3. See the file LICENSE for details
# or find a copy online at https://www.gnu.org/licenses/gpl-3.0

"""
modescan.model

(c) 2026 Benjamin Walkenhorst
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from ipaddress import IPv4Address, IPv6Address
from typing import Optional, Union

PortSet = tuple[int, ...]


@dataclass(frozen=True, slots=True, kw_only=True)
class Target:
    """Target is a host we want to scan, after its name has been resolved."""

    raw: str
    addr: Union[IPv4Address, IPv6Address]
    literal: bool

    @property
    def astr(self) -> str:
        """Return the Target's address as a string."""
        return str(self.addr)

    @property
    def family(self) -> int:
        """Return the IP version of the Target's address."""
        return self.addr.version


@dataclass(frozen=True, slots=True)
class Quick:
    """Scan a handful of very common ports."""

    name = "Quick Scan"
    description = "Scan common ports (21, 22, 23, 25, 53, 80, 110, 143, " + \
        "443, 445, 3306, 3389, 5432, 8080)"


@dataclass(frozen=True, slots=True)
class Standard:
    """Scan the top 100 ports."""

    name = "Standard Scan"
    description = "Scan top 100 most common ports"


@dataclass(frozen=True, slots=True)
class Full:
    """Scan all of them."""

    name = "Full Scan"
    description = "Scan all 65535 ports (may take several minutes)"


@dataclass(frozen=True, slots=True)
class Custom:
    """Scan the ports given by a user-supplied spec, e.g. 22,80,8000-8100"""

    spec: str
    name = "Custom Range"
    description = "Scan a custom port range (e.g., 1-1000)"


ScanMode = Union[Quick, Standard, Full, Custom]


class ProbeOutcome(Enum):
    """ProbeOutcome is what we learned about a single port."""

    Open = auto()
    Closed = auto()
    Filtered = auto()


class ScanStatus(Enum):
    """ScanStatus is the state of a ScanSession."""

    Idle = auto()
    Running = auto()
    Completed = auto()
    Cancelled = auto()
    Failed = auto()

    @property
    def terminal(self) -> bool:
        """Return True if no further transitions are possible from this state."""
        return self in (ScanStatus.Completed, ScanStatus.Cancelled, ScanStatus.Failed)


@dataclass(frozen=True, slots=True, kw_only=True)
class ScanResult:
    """ScanResult is the outcome of probing one port."""

    port: int
    outcome: ProbeOutcome
    service: Optional[str] = None

    @property
    def is_open(self) -> bool:
        """Return True if the port accepted our connection."""
        return self.outcome == ProbeOutcome.Open


@dataclass(frozen=True, slots=True, kw_only=True)
class ScanProgress:
    """ScanProgress is a snapshot of how far a scan has come."""

    completed: int
    total: int
    open_count: int

    @property
    def fraction(self) -> float:
        """Return the share of ports completed as a number between 0 and 1."""
        if self.total == 0:
            return 1.0
        return self.completed / self.total


@dataclass(frozen=True, slots=True, kw_only=True)
class ScanReport:
    """ScanReport is the final word on a scan."""

    target: Optional[Target]
    requested: int
    attempted: int
    status: ScanStatus
    results: tuple[ScanResult, ...] = field(default_factory=tuple)
    reason: Optional[str] = None

    @property
    def partial(self) -> bool:
        """Return True if the report does not cover all requested ports."""
        return self.status != ScanStatus.Completed or self.attempted < self.requested

    @property
    def open_ports(self) -> list[ScanResult]:
        """Return the results for the ports we found open."""
        return [r for r in self.results if r.is_open]


# Local Variables: #
# python-indent: 4 #
# End: #

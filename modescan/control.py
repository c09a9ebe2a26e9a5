#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# Time-stamp: <2026-10-16 18:52:30 krylon>
#
# /data/code/python/modescan/control.py
# created on 14. 10. 2026
# (c) 2026 Benjamin Walkenhorst
#
# This file is part of the modescan port scanner. It is distributed under the
# terms of the GNU General Public License 3. See the file LICENSE for details
# or find a copy online at https://www.gnu.org/licenses/gpl-3.0

"""
modescan.control

(c) 2026 Benjamin Walkenhorst

This file contains the types a ScanSession uses to talk to whoever is watching it.
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from threading import Lock
from typing import Optional, Union

from modescan.model import ScanProgress, ScanReport, ScanResult


class EventKind(Enum):
    """EventKind tells what an Event carries."""

    Result = auto()
    Progress = auto()
    Report = auto()


@dataclass(kw_only=True, slots=True)
class Event:
    """Event is a message from a ScanSession to its consumer."""

    Tag: EventKind
    Payload: Union[ScanResult, ScanProgress, ScanReport]


@dataclass(kw_only=True, slots=True)
class ProgressSlot:
    """ProgressSlot holds the most recent progress snapshot.

    Publishing never waits for the consumer. A snapshot the consumer has not
    picked up yet is simply replaced by the next one.
    """

    lock: Lock = field(default_factory=Lock)
    _latest: Optional[ScanProgress] = None
    _fresh: bool = False
    superseded: int = 0

    def publish(self, snap: ScanProgress) -> None:
        """Store <snap>, replacing whatever was there before."""
        with self.lock:
            if self._fresh:
                self.superseded += 1
            self._latest = snap
            self._fresh = True

    def take(self) -> Optional[ScanProgress]:
        """Return the latest snapshot if it has not been taken before, otherwise None."""
        with self.lock:
            if not self._fresh:
                return None
            self._fresh = False
            return self._latest

    @property
    def latest(self) -> Optional[ScanProgress]:
        """Return the latest snapshot, whether it has been taken or not."""
        with self.lock:
            return self._latest


# Local Variables: #
# python-indent: 4 #
# End: #

#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# Time-stamp: <2026-10-16 19:05:44 krylon>
#
# /data/code/python/modescan/test_control.py
# created on 16. 10. 2026
# (c) 2026 Benjamin Walkenhorst
#
# This file is part of the modescan port scanner. It is distributed under the
# terms of the GNU General Public License 3. See the file LICENSE for details
# or find a copy online at https://www.gnu.org/licenses/gpl-3.0

"""
modescan.test_control

(c) 2026 Benjamin Walkenhorst
"""

import unittest
from threading import Thread
from typing import Final

from modescan.control import ProgressSlot
from modescan.model import ScanProgress


def snap(done: int, total: int = 100, open_count: int = 0) -> ScanProgress:
    """Shorthand for creating a ScanProgress."""
    return ScanProgress(completed=done, total=total, open_count=open_count)


class TestProgressSlot(unittest.TestCase):
    """Test the latest-wins progress channel."""

    def test_01_empty(self) -> None:
        """A fresh slot has nothing to give."""
        slot: Final[ProgressSlot] = ProgressSlot()
        self.assertIsNone(slot.take())
        self.assertIsNone(slot.latest)

    def test_02_latest_wins(self) -> None:
        """Snapshots nobody picked up are replaced by newer ones."""
        slot: Final[ProgressSlot] = ProgressSlot()
        for i in range(1, 4):
            slot.publish(snap(i))

        self.assertEqual(slot.take(), snap(3))
        self.assertEqual(slot.superseded, 2)
        self.assertIsNone(slot.take())
        self.assertEqual(slot.latest, snap(3))

        slot.publish(snap(4, open_count=1))
        self.assertEqual(slot.take(), snap(4, open_count=1))
        self.assertEqual(slot.superseded, 2)

    def test_03_publish_never_waits(self) -> None:
        """Many publishers and no consumer at all do not get stuck."""
        slot: Final[ProgressSlot] = ProgressSlot()
        cnt: Final[int] = 1000

        def publish(base: int) -> None:
            for i in range(cnt):
                slot.publish(snap(base + i, total=10 * cnt))

        threads: Final[list[Thread]] = [Thread(target=publish, args=(n * cnt, ))
                                        for n in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join(10)
            self.assertFalse(t.is_alive())

        self.assertEqual(slot.superseded, 4 * cnt - 1)
        self.assertIsNotNone(slot.take())

    def test_04_fraction(self) -> None:
        """Progress is reported as a fraction of the total."""
        self.assertAlmostEqual(snap(25).fraction, 0.25)
        self.assertEqual(snap(0, total=0).fraction, 1.0)


# Local Variables: #
# python-indent: 4 #
# End: #

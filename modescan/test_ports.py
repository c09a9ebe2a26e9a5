#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# Time-stamp: <2026-10-15 20:40:12 krylon>
#
# /data/code/python/modescan/test_ports.py
# created on 13. 10. 2026
# (c) 2026 Benjamin Walkenhorst
#
# This file is part of the modescan port scanner. It is distributed under the
# terms of the GNU General Public License 3. See the file LICENSE for details
# or find a copy online at https://www.gnu.org/licenses/gpl-3.0

"""
modescan.test_ports

(c) 2026 Benjamin Walkenhorst
"""

import unittest
from typing import Final

from modescan.model import Custom, Full, PortSet, Quick, Standard
from modescan.ports import InvalidPortSpec, expand, parse_mode


def is_canonical(ports: PortSet) -> bool:
    """Return True if <ports> is strictly ascending and within the valid range."""
    return all(1 <= p <= 65535 for p in ports) and \
        all(a < b for a, b in zip(ports, ports[1:]))


class TestFixedModes(unittest.TestCase):
    """Test the predefined scan modes."""

    def test_01_quick(self) -> None:
        """Quick mode has 14 well-known ports."""
        ports: Final[PortSet] = expand(Quick())
        self.assertEqual(len(ports), 14)
        self.assertTrue(is_canonical(ports))
        for p in (21, 22, 23, 25, 53, 80, 110, 143, 443, 445, 3306, 3389, 5432, 8080):
            self.assertIn(p, ports)

    def test_02_standard(self) -> None:
        """Standard mode has 100 ports and includes the quick ones."""
        ports: Final[PortSet] = expand(Standard())
        self.assertEqual(len(ports), 100)
        self.assertTrue(is_canonical(ports))
        self.assertTrue(set(expand(Quick())).issubset(ports))

    def test_03_full(self) -> None:
        """Full mode has every port there is."""
        ports: Final[PortSet] = expand(Full())
        self.assertEqual(len(ports), 65535)
        self.assertEqual(ports, tuple(range(1, 65536)))


class TestCustomSpec(unittest.TestCase):
    """Test parsing custom port specs."""

    def test_01_valid(self) -> None:
        """Parse some valid specs."""
        test_cases: Final[list[tuple[str, PortSet]]] = [
            ("80", (80, )),
            ("22,22,80", (22, 80)),
            ("443,22,80", (22, 80, 443)),
            ("22,80,443,8000-8005", (22, 80, 443, 8000, 8001, 8002, 8003, 8004, 8005)),
            (" 10 - 12 , 11,  1 ", (1, 10, 11, 12)),
            ("5-7,6-9", (5, 6, 7, 8, 9)),
            ("65535", (65535, )),
            ("1-1", (1, )),
        ]

        for spec, expected in test_cases:
            with self.subTest(spec=spec):
                ports = expand(Custom(spec=spec))
                self.assertEqual(ports, expected)
                self.assertTrue(is_canonical(ports))

    def test_02_invalid(self) -> None:
        """Invalid specs are rejected, naming the offending token."""
        test_cases: Final[list[tuple[str, str]]] = [
            ("70-65", "70-65"),
            ("0-10", "0-10"),
            ("70000", "70000"),
            ("22,0", "0"),
            ("22,http", "http"),
            ("1-2-3", "1-2-3"),
            ("-5", "-5"),
            ("+5", "+5"),
            ("80,,443", ""),
            ("22;80", "22;80"),
        ]

        for spec, token in test_cases:
            with self.subTest(spec=spec):
                with self.assertRaises(InvalidPortSpec) as ctx:
                    expand(Custom(spec=spec))
                self.assertEqual(ctx.exception.token.strip(), token)
                if token != "":
                    self.assertIn(token, str(ctx.exception))

    def test_03_empty(self) -> None:
        """An empty spec is not acceptable."""
        for spec in ("", "   "):
            with self.subTest(spec=spec):
                with self.assertRaises(InvalidPortSpec):
                    expand(Custom(spec=spec))

    def test_04_big_range(self) -> None:
        """Overlapping ranges covering everything collapse into the full set."""
        ports: Final[PortSet] = expand(Custom(spec="30000-65535,1-40000,443"))
        self.assertEqual(ports, expand(Full()))


class TestParseMode(unittest.TestCase):
    """Test parsing mode selectors."""

    def test_01_selectors(self) -> None:
        """Parse valid selectors."""
        self.assertEqual(parse_mode("quick"), Quick())
        self.assertEqual(parse_mode("Standard"), Standard())
        self.assertEqual(parse_mode(" FULL "), Full())
        self.assertEqual(parse_mode("custom:22,80"), Custom(spec="22,80"))

    def test_02_bad_selectors(self) -> None:
        """Reject selectors we do not know."""
        for sel in ("", "fast", "custom", "quick:22", "full:"):
            with self.subTest(selector=sel):
                with self.assertRaises(InvalidPortSpec):
                    parse_mode(sel)

    def test_03_custom_spec_checked_late(self) -> None:
        """A bad spec in a custom selector is caught by expand."""
        mode = parse_mode("custom:70-65")
        with self.assertRaises(InvalidPortSpec):
            expand(mode)


# Local Variables: #
# python-indent: 4 #
# End: #

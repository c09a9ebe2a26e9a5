#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# Time-stamp: <2026-10-18 17:42:19 krylon>
#
# /data/code/python/modescan/test_main.py
# created on 18. 10. 2026
# (c) 2026 Benjamin Walkenhorst
#
# This file is part of the modescan port scanner. It is distributed under the
# terms of the GNU General Public License 3. See the file LICENSE for details
# or find a copy online at https://www.gnu.org/licenses/gpl-3.0

"""
modescan.test_main

(c) 2026 Benjamin Walkenhorst
"""

import contextlib
import io
import os
import shutil
import unittest
from datetime import datetime
from typing import Final

from modescan import common
from modescan.config import Config
from modescan.main import main
from modescan.model import Quick, ScanStatus
from modescan.scanner import scan

test_dir: Final[str] = os.path.join(
    "/tmp",
    datetime.now().strftime(f"{common.AppName.lower()}_test_main_%Y%m%d_%H%M%S"))


class TestMain(unittest.TestCase):
    """Test the command line interface and the scan() shortcut."""

    @classmethod
    def setUpClass(cls) -> None:
        """Prepare the testing environment."""
        common.set_basedir(test_dir)

    @classmethod
    def tearDownClass(cls) -> None:
        """Clean up afterwards."""
        shutil.rmtree(test_dir, ignore_errors=True)

    def run_main(self, *args: str) -> tuple[int, str]:
        """Run main() with <args>, return its exit code and what it printed."""
        out: Final[io.StringIO] = io.StringIO()
        with contextlib.redirect_stdout(out), contextlib.redirect_stderr(out):
            rc: int = main(["-b", test_dir, *args])
        return rc, out.getvalue()

    def test_01_scan_shortcut(self) -> None:
        """scan() starts a session configured by a Config."""
        cfg: Final[Config] = Config(workers=4, timeout=0.5, service_detection=False)
        sess = scan("127.0.0.1", "custom:65534-65535", cfg)
        self.assertTrue(sess.wait(10))
        self.assertEqual(sess.report.status, ScanStatus.Completed)
        self.assertEqual(sess.report.attempted, 2)

    def test_02_cli_scan(self) -> None:
        """Scan a few closed ports from the command line and save the report."""
        rc, out = self.run_main("127.0.0.1", "-m", "custom:65533-65535", "-w", "3", "-s")
        self.assertEqual(rc, 0)
        self.assertIn("Status: Completed", out)
        self.assertIn("Saved results to", out)
        self.assertIn("Custom Range: Scan a custom port range", out)
        self.assertEqual(len(os.listdir(common.path.reports)), 1)

    def test_03_cli_bad_target(self) -> None:
        """A bad target is reported, and nothing is scanned."""
        rc, out = self.run_main("256.1.1.1")
        self.assertEqual(rc, 1)
        self.assertIn("Status: Failed", out)
        self.assertIn("256.1.1.1", out)

    def test_04_cli_bad_ports(self) -> None:
        """A bad port spec names the offending token."""
        rc, out = self.run_main("127.0.0.1", "-m", "custom:22,0-10")
        self.assertEqual(rc, 1)
        self.assertIn("0-10", out)

    def test_05_cli_bad_timeout(self) -> None:
        """A timeout that is not a positive, finite number is a usage error."""
        for timeout in ("nan", "inf", "0"):
            with self.subTest(timeout=timeout):
                with self.assertRaises(SystemExit) as ctx:
                    self.run_main("127.0.0.1", "-m", "custom:65535", "-t", timeout)
                self.assertEqual(ctx.exception.code, 2)

    def test_06_cli_mode_banner(self) -> None:
        """The CLI tells which kind of scan it runs."""
        rc, out = self.run_main("127.0.0.1", "-m", "Quick", "-w", "14", "-t", "0.2")
        self.assertEqual(rc, 0)
        self.assertIn(f"{Quick.name}: {Quick.description}", out)
        self.assertIn("Scanning 14 ports on 127.0.0.1", out)


# Local Variables: #
# python-indent: 4 #
# End: #

#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# Time-stamp: <2026-10-17 10:31:02 krylon>
#
# /data/code/python/modescan/report.py
# created on 16. 10. 2026
# (c) 2026 Benjamin Walkenhorst
#
# This file is part of the modescan port scanner. It is distributed under the
# terms of the GNU General Public License 3. See the file LICENSE for details
# or find a copy online at https://www.gnu.org/licenses/gpl-3.0

"""
modescan.report

(c) 2026 Benjamin Walkenhorst
"""

import os
import pathlib
import re
from datetime import datetime
from typing import Final, Optional, TextIO, Union

from modescan import common
from modescan.model import ScanReport, ScanStatus

_unsafe: Final[re.Pattern] = re.compile(r"[^A-Za-z0-9_-]")


def report_name(report: ScanReport, stamp: Optional[datetime] = None) -> str:
    """Return the file name a report is saved under."""
    if stamp is None:
        stamp = datetime.now()
    tname: Final[str] = report.target.raw if report.target is not None else "unknown"
    return f"scan_{_unsafe.sub('_', tname)}_{stamp.strftime('%Y%m%d_%H%M%S')}.txt"


def write_report(fh: TextIO, report: ScanReport, stamp: Optional[datetime] = None) -> None:
    """Write a human-readable version of <report> to <fh>."""
    if stamp is None:
        stamp = datetime.now()
    open_ports = report.open_ports

    fh.write("Port Scan Results\n")
    fh.write("==================\n")
    if report.target is not None:
        fh.write(f"Target: {report.target.raw}")
        if not report.target.literal:
            fh.write(f" ({report.target.astr})")
        fh.write("\n")
    fh.write(f"Scan Time: {stamp.strftime(common.TimeFmt)}\n")
    fh.write(f"Status: {report.status.name}")
    if report.partial and report.status == ScanStatus.Cancelled:
        fh.write(f" (partial, {report.attempted} of {report.requested} ports scanned)")
    fh.write("\n")
    if report.reason is not None:
        fh.write(f"Reason: {report.reason}\n")
    fh.write(f"Open Ports: {len(open_ports)}\n\n")

    if not open_ports:
        fh.write("No open ports found.\n")
        return

    fh.write("PORT     STATE    SERVICE\n")
    fh.write("----     -----    -------\n")
    for res in open_ports:
        fh.write(f"{res.port:<8} {'open':<8} {res.service or 'unknown'}\n")


def save_report(report: ScanReport,
                folder: Optional[Union[str, pathlib.Path]] = None) -> pathlib.Path:
    """Save <report> to a text file in <folder> and return its path."""
    if folder is None:
        folder = common.path.reports
    os.makedirs(folder, exist_ok=True)

    stamp: Final[datetime] = datetime.now()
    path: Final[pathlib.Path] = pathlib.Path(folder, report_name(report, stamp))

    with open(path, "w", encoding="utf-8") as fh:
        write_report(fh, report, stamp)

    common.get_logger("report").info("Saved report for %s to %s",
                                     report.target.raw if report.target else "?",
                                     path)
    return path


# Local Variables: #
# python-indent: 4 #
# End: #

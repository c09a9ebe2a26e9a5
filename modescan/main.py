#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# Time-stamp: <2026-10-18 17:45:10 krylon>
#
# /data/code/python/modescan/main.py
# created on 16. 10. 2026
# (c) 2026 Benjamin Walkenhorst
#
# This file is part of the modescan port scanner. It is distributed under the
# terms of the GNU General Public License 3. See the file LICENSE for details
# or find a copy online at https://www.gnu.org/licenses/gpl-3.0

"""
modescan.main

(c) 2026 Benjamin Walkenhorst
"""


import argparse
import logging
import pathlib
import sys
from typing import Any, Optional, Sequence

from modescan import common
from modescan.common import ConfigError
from modescan.config import Config
from modescan.control import EventKind
from modescan.model import (Custom, Full, Quick, ScanReport, ScanStatus,
                            Standard)
from modescan.report import save_report, write_report
from modescan.resolver import TargetResolver
from modescan.scanner import ScanSession


def main(argv: Optional[Sequence[str]] = None) -> int:
    argp: argparse.ArgumentParser = argparse.ArgumentParser(
        prog=common.AppName,
        description="Scan the TCP ports of a host")
    argp.add_argument("target",
                      help="IP address or hostname to scan")
    argp.add_argument("-m", "--mode",
                      default="quick",
                      help="; ".join(f"{sel}: {m.description}" for sel, m in
                                     (("quick", Quick),
                                      ("standard", Standard),
                                      ("full", Full),
                                      ("custom:<ports>", Custom))) +
                      " (e.g. custom:22,80,8000-8100)")
    argp.add_argument("-w", "--workers",
                      type=int,
                      help="The number of connection attempts to run in parallel")
    argp.add_argument("-t", "--timeout",
                      type=float,
                      help="Seconds to wait for each connection attempt")
    argp.add_argument("-n", "--no-service",
                      action="store_true",
                      help="Do not name the services found on open ports")
    argp.add_argument("-s", "--save",
                      action="store_true",
                      help="Save the report to a file")
    argp.add_argument("-v", "--verbose",
                      action="store_true",
                      help="Print log messages to the terminal")
    argp.add_argument("-b", "--basedir",
                      type=pathlib.Path,
                      default=common.path.base(),
                      help="Directory to store application data in")

    args = argp.parse_args(argv)
    common.set_basedir(args.basedir)
    if args.verbose:
        common.set_tty_level(logging.DEBUG)

    try:
        cfg: Config = Config.load()
    except ConfigError as err:
        print(f"Error in configuration file: {err}", file=sys.stderr)
        return 2

    overrides: dict[str, Any] = {}
    if args.workers is not None:
        overrides["workers"] = args.workers
    if args.timeout is not None:
        overrides["timeout"] = args.timeout
    if args.no_service:
        overrides["service_detection"] = False

    try:
        cfg.update(**overrides)
    except ConfigError as err:
        argp.error(f"Invalid option: {err}")

    sess: ScanSession = ScanSession(
        target_input=args.target,
        mode=args.mode,
        workers=cfg.workers,
        timeout=cfg.timeout,
        service_detection=cfg.service_detection,
        resolver=TargetResolver(timeout=cfg.resolver_timeout,
                                lifetime=cfg.resolver_lifetime),
    )

    if sess.start() == ScanStatus.Running:
        print(f"{sess.mode.name}: {sess.mode.description}")
        print(f"Scanning {len(sess.ports)} ports on {sess.target.raw} ({sess.target.astr})")
    report: Optional[ScanReport] = None

    try:
        for evt in sess.events():
            match evt.Tag:
                case EventKind.Progress:
                    print(f"\rScanning... {evt.Payload.completed}/{evt.Payload.total} ports"
                          f" | open={evt.Payload.open_count}",
                          end="",
                          flush=True)
                case EventKind.Report:
                    report = evt.Payload
    except KeyboardInterrupt:
        print("\nCancelling scan, waiting for pending probes.")
        sess.cancel()
        sess.wait()
        report = sess.report

    print()
    assert report is not None
    write_report(sys.stdout, report)

    if args.save and report.status != ScanStatus.Failed:
        path = save_report(report, cfg.report_dir)
        print(f"Saved results to {path}")

    match report.status:
        case ScanStatus.Completed:
            return 0
        case ScanStatus.Cancelled:
            return 130
        case _:
            return 1


if __name__ == '__main__':
    sys.exit(main())

# Local Variables: #
# python-indent: 4 #
# End: #

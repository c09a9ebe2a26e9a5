#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# Time-stamp: <2026-10-18 17:31:12 krylon>
#
# /data/code/python/modescan/scanner.py
# created on 14. 10. 2026
# (c) 2026 Benjamin Walkenhorst
#
# This file is part of the modescan port scanner. It is distributed under the
# terms of the GNU General Public License 3. See the file LICENSE for details
# or find a copy online at https://www.gnu.org/licenses/gpl-3.0

"""
modescan.scanner

(c) 2026 Benjamin Walkenhorst

A ScanSession probes the ports of one Target with a fixed number of worker threads.

A feeder thread pushes the ports, in ascending order, into a queue that holds
at most as many items as there are workers. Each worker takes one port at a
time, so the number of connection attempts in flight never exceeds the number
of workers. Results go into an unbounded queue, progress snapshots into a
ProgressSlot that only keeps the latest one. Cancelling a session shuts down
the port queue, the probes that are already running finish on their own.
"""

import logging
import math
import resource
import time
from dataclasses import dataclass, field
from queue import Empty, Queue, ShutDown
from threading import Event as Flag
from threading import RLock, Thread
from typing import Final, Iterator, Optional, Union

from modescan import common
from modescan.common import ModeScanError, ValidationError
from modescan.config import Config, default_timeout, default_workers
from modescan.control import Event, EventKind, ProgressSlot
from modescan.model import (PortSet, ProbeOutcome, ScanMode, ScanProgress,
                            ScanReport, ScanResult, ScanStatus, Target)
from modescan.ports import expand, parse_mode
from modescan.probe import ProbeFunc, probe_port
from modescan.resolver import TargetResolver
from modescan.services import lookup

# File descriptors we leave alone for the rest of the process (stdio, log files, ...)
fd_reserve: Final[int] = 64
poll_interval: Final[float] = 0.05


class SessionError(ModeScanError):
    """SessionError indicates a ScanSession was used the wrong way."""


def max_workers(wanted: int) -> int:
    """Return <wanted>, reduced if necessary to stay below the open file limit."""
    soft, _ = resource.getrlimit(resource.RLIMIT_NOFILE)
    if soft == resource.RLIM_INFINITY:
        return wanted
    return max(1, min(wanted, soft - fd_reserve))


@dataclass(kw_only=True, slots=True)
class ScanSession:
    """ScanSession scans the ports of one host."""

    target_input: str
    mode: Union[ScanMode, str]
    workers: int = default_workers
    timeout: float = default_timeout
    service_detection: bool = True
    resolver: Optional[TargetResolver] = None
    probe: ProbeFunc = probe_port
    log: logging.Logger = field(default_factory=lambda: common.get_logger("scanner"))
    lock: RLock = field(default_factory=RLock)
    target: Optional[Target] = field(init=False, default=None)
    ports: PortSet = field(init=False, default=())
    scanQ: Queue[int] = field(init=False)
    resQ: Queue[ScanResult] = field(init=False)
    progress_slot: ProgressSlot = field(default_factory=ProgressSlot)
    peak_inflight: int = field(init=False, default=0)
    _status: ScanStatus = field(init=False, default=ScanStatus.Idle)
    _results: dict[int, ScanResult] = field(init=False, default_factory=dict)
    _completed: int = field(init=False, default=0)
    _open_cnt: int = field(init=False, default=0)
    _inflight: int = field(init=False, default=0)
    _live: int = field(init=False, default=0)
    _cancel: Flag = field(init=False, default_factory=Flag)
    _done: Flag = field(init=False, default_factory=Flag)
    _report: Optional[ScanReport] = field(init=False, default=None)
    _started: float = field(init=False, default=0.0)

    def __post_init__(self) -> None:
        if self.workers < 1:
            raise SessionError(f"Need at least one worker, not {self.workers}")
        if not (math.isfinite(self.timeout) and self.timeout > 0):
            raise SessionError(
                f"Probe timeout must be positive and finite, not {self.timeout}")
        self.resQ = Queue(0)
        self.scanQ = Queue(self.workers)

    @property
    def status(self) -> ScanStatus:
        """Return the Session's status."""
        with self.lock:
            return self._status

    @property
    def cancelled(self) -> bool:
        """Return True if the Session has been asked to stop."""
        return self._cancel.is_set()

    @property
    def inflight(self) -> int:
        """Return the number of probes currently running."""
        with self.lock:
            return self._inflight

    @property
    def progress(self) -> ScanProgress:
        """Return the most recent progress snapshot."""
        snap = self.progress_slot.latest
        if snap is not None:
            return snap
        return ScanProgress(completed=0, total=len(self.ports), open_count=0)

    @property
    def report(self) -> Optional[ScanReport]:
        """Return the final report, or None if the Session has not finished, yet."""
        with self.lock:
            return self._report

    def start(self) -> ScanStatus:
        """Validate the target and the ports, then start scanning.

        If either is not acceptable, the Session fails right away without
        probing anything, and its report says why.
        """
        with self.lock:
            if self._status != ScanStatus.Idle:
                raise SessionError(f"Cannot start a session that is {self._status.name}")

            try:
                mode: Final[ScanMode] = parse_mode(self.mode) \
                    if isinstance(self.mode, str) else self.mode
                if self.resolver is None:
                    self.resolver = TargetResolver()
                self.target = self.resolver.resolve(self.target_input)
                self.mode = mode
                self.ports = expand(mode)
            except ValidationError as err:
                self.log.error("Cannot scan %s: %s", self.target_input, err)
                self._status = ScanStatus.Failed
                self._report = ScanReport(target=self.target,
                                          requested=len(self.ports),
                                          attempted=0,
                                          status=ScanStatus.Failed,
                                          reason=str(err))
                self._done.set()
                return self._status

            wcnt: Final[int] = max_workers(min(self.workers, len(self.ports)))
            if wcnt < self.workers:
                self.log.debug("Using %d worker threads instead of %d",
                               wcnt,
                               self.workers)

            self.log.info("Scanning %d ports on %s (%s) with %d workers",
                          len(self.ports),
                          self.target.raw,
                          self.target.astr,
                          wcnt)

            self._status = ScanStatus.Running
            self._started = time.monotonic()
            self._live = wcnt

            feeder: Thread = Thread(target=self._feeder, name="scan_feeder", daemon=True)
            feeder.start()

            for wid in range(1, wcnt + 1):
                w: Thread = Thread(target=self._scan_worker,
                                   name=f"scan_worker_{wid:03d}",
                                   args=(wid, ),
                                   daemon=True)
                w.start()

            return self._status

    def cancel(self) -> None:
        """Stop dispatching ports. Probes that are already running are allowed to finish."""
        if self._cancel.is_set():
            return
        self._cancel.set()
        self.scanQ.shutdown(immediate=True)
        if self.status == ScanStatus.Running:
            self.log.info("Scan of %s was cancelled.", self.target_input)

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Wait for the Session to finish. Return True if it did."""
        return self._done.wait(timeout)

    def run(self) -> ScanReport:
        """Start the Session, wait for it to finish and return the report."""
        self.start()
        self.wait()
        assert self._report is not None
        return self._report

    def events(self) -> Iterator[Event]:
        """Yield results and progress snapshots as they come in, then the final report.

        Results and progress may arrive in any order, the Report is always last.
        """
        if self.status == ScanStatus.Idle:
            raise SessionError("Session has not been started")

        while True:
            finished: bool = self._done.is_set()

            try:
                res: ScanResult = self.resQ.get(timeout=0 if finished else poll_interval)
                yield Event(Tag=EventKind.Result, Payload=res)
                continue
            except Empty:
                pass

            snap: Optional[ScanProgress] = self.progress_slot.take()
            if snap is not None:
                yield Event(Tag=EventKind.Progress, Payload=snap)

            if finished:
                assert self._report is not None
                yield Event(Tag=EventKind.Report, Payload=self._report)
                return

    def _feeder(self) -> None:
        """Push the ports into the scan queue, until we run out or are cancelled."""
        self.log.debug("Feeder thread is coming up...")
        try:
            for port in self.ports:
                if self._cancel.is_set():
                    break
                self.scanQ.put(port)
        except ShutDown:
            pass
        finally:
            self.scanQ.shutdown()
            self.log.debug("Feeder thread is quitting.")

    def _scan_worker(self, wid: int) -> None:
        try:
            while True:
                try:
                    port: int = self.scanQ.get()
                except ShutDown:
                    return

                if self._cancel.is_set():
                    return

                with self.lock:
                    self._inflight += 1
                    if self._inflight > self.peak_inflight:
                        self.peak_inflight = self._inflight

                try:
                    outcome: ProbeOutcome = self.probe(self.target.astr, port, self.timeout)
                except Exception as err:  # pylint: disable-msg=W0718
                    self.log.error("%s probing %s:%d in worker %03d: %s",
                                   err.__class__.__name__,
                                   self.target.astr,
                                   port,
                                   wid,
                                   err)
                    outcome = ProbeOutcome.Filtered

                self._record(port, outcome)
        finally:
            self._worker_done()

    def _record(self, port: int, outcome: ProbeOutcome) -> None:
        """Store the result for <port> and publish the progress we have made."""
        res: Final[ScanResult] = ScanResult(
            port=port,
            outcome=outcome,
            service=lookup(port) if self.service_detection else None,
        )

        with self.lock:
            self._inflight -= 1
            assert port not in self._results, f"Port {port} was probed twice"
            self._results[port] = res
            self._completed += 1
            if outcome == ProbeOutcome.Open:
                self._open_cnt += 1
            snap: Final[ScanProgress] = ScanProgress(completed=self._completed,
                                                     total=len(self.ports),
                                                     open_count=self._open_cnt)

        self.resQ.put(res)
        self.progress_slot.publish(snap)

    def _worker_done(self) -> None:
        """Called by each worker on its way out. The last one to leave closes the session."""
        with self.lock:
            self._live -= 1
            if self._live > 0:
                return

            if self._completed == len(self.ports):
                self._status = ScanStatus.Completed
            else:
                self._status = ScanStatus.Cancelled

            self._report = ScanReport(
                target=self.target,
                requested=len(self.ports),
                attempted=self._completed,
                status=self._status,
                results=tuple(self._results[p] for p in sorted(self._results)),
            )

            self.log.info("Scan of %s is %s after %.2f seconds: %d of %d ports, %d open",
                          self.target.raw,
                          self._status.name,
                          time.monotonic() - self._started,
                          self._completed,
                          len(self.ports),
                          self._open_cnt)

        self._done.set()


def scan(target: str,
         mode: Union[ScanMode, str],
         cfg: Optional[Config] = None) -> ScanSession:
    """Create a ScanSession configured by <cfg> (or the configuration file) and start it."""
    if cfg is None:
        cfg = Config.load()

    sess: ScanSession = ScanSession(
        target_input=target,
        mode=mode,
        workers=cfg.workers,
        timeout=cfg.timeout,
        service_detection=cfg.service_detection,
        resolver=TargetResolver(timeout=cfg.resolver_timeout,
                                lifetime=cfg.resolver_lifetime),
    )
    sess.start()
    return sess


# Local Variables: #
# python-indent: 4 #
# End: #

#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# Time-stamp: <2026-10-18 17:48:55 krylon>
#
# /data/code/python/modescan/resolver.py
# created on 13. 10. 2026
# (c) 2026 Benjamin Walkenhorst
#
# This file is part of the modescan port scanner. It is distributed under the
# terms of the GNU General Public License 3. See the file LICENSE for details
# or find a copy online at https://www.gnu.org/licenses/gpl-3.0

"""
modescan.resolver

(c) 2026 Benjamin Walkenhorst

Check what the user gave us as a target and turn it into an address we can connect to.

Hostnames go to the DNS first, using dnspython, and only to the system
resolver (getaddrinfo) if the DNS has no address for them. A name that exists
in the DNS and is also listed, with a different address, in /etc/hosts thus
resolves to the address the DNS gives. Names only the system resolver knows,
like localhost, still work.
"""

import logging
import re
import socket
from dataclasses import dataclass, field
from ipaddress import IPv4Address, IPv6Address, ip_address
from threading import Lock, RLock
from typing import Final, Optional, Union

from dns.exception import DNSException, Timeout
from dns.resolver import (NXDOMAIN, LifetimeTimeout, NoAnswer, NoNameservers,
                          NoResolverConfiguration, Resolver)

from modescan import common
from modescan.common import ValidationError
from modescan.config import default_resolver_timeout
from modescan.model import Target

max_name_len: Final[int] = 253
max_label_len: Final[int] = 63

shell_meta: Final[frozenset[str]] = frozenset(";&|$`<>(){}[]!*?~'\"\\#%^=,")

_label_pat: Final[re.Pattern] = re.compile(r"^[A-Za-z0-9](?:[A-Za-z0-9-]*[A-Za-z0-9])?$")

# Answers are remembered for the life of the process.
_memo: Final[dict[str, Union[IPv4Address, IPv6Address]]] = {}
_memo_lock: Final[RLock] = RLock()


class InvalidTarget(ValidationError):
    """InvalidTarget means the target is neither an IP address nor a valid hostname."""

    target: str

    def __init__(self, target: str, msg: str) -> None:
        super().__init__(f"Invalid target '{target}': {msg}")
        self.target = target


class UnresolvableHost(ValidationError):
    """UnresolvableHost means we could not find an address for a hostname."""

    target: str

    def __init__(self, target: str, msg: str) -> None:
        super().__init__(f"Failed to resolve hostname '{target}': {msg}")
        self.target = target


def parse_literal(s: str) -> Optional[Union[IPv4Address, IPv6Address]]:
    """If <s> is an IP address, return it, otherwise return None."""
    if s.startswith("[") and s.endswith("]"):
        s = s[1:-1]
    try:
        return ip_address(s)
    except ValueError:
        return None


def check_hostname(raw: str, name: str) -> str:
    """Return <name> without a trailing dot, or raise InvalidTarget if it is no valid hostname."""
    if name.endswith("."):
        name = name[:-1]

    if len(name) > max_name_len:
        raise InvalidTarget(raw, f"Hostname too long (max {max_name_len} characters)")

    labels: Final[list[str]] = name.split(".")

    for label in labels:
        if label == "" or len(label) > max_label_len:
            raise InvalidTarget(raw, "Invalid hostname format")
        if label.startswith("-") or label.endswith("-"):
            raise InvalidTarget(raw,
                                "Invalid hostname format (cannot start or end with hyphen)")
        if _label_pat.match(label) is None:
            raise InvalidTarget(
                raw,
                "Invalid hostname format (only alphanumeric and hyphens allowed)")

    # Something like 256.1.1.1 is a botched IP address, not a hostname.
    if all(x.isdigit() for x in labels):
        raise InvalidTarget(raw, "Not a valid IP address")

    return name.lower()


@dataclass(kw_only=True, slots=True)
class TargetResolver:
    """TargetResolver validates targets and resolves hostnames to addresses."""

    log: logging.Logger = field(default_factory=lambda: common.get_logger("resolver"))
    lock: RLock = field(default_factory=lambda: _memo_lock)
    timeout: float = default_resolver_timeout
    lifetime: float = default_resolver_timeout
    res: Optional[Resolver] = None
    memo: dict[str, Union[IPv4Address, IPv6Address]] = field(default_factory=lambda: _memo)

    def __post_init__(self) -> None:
        if self.res is None:
            try:
                self.res = Resolver()
            except NoResolverConfiguration as err:
                self.log.warning("Cannot configure DNS resolver, using system resolver: %s",
                                 err)
            else:
                self.res.timeout = self.timeout
                self.res.lifetime = self.lifetime

    def resolve(self, raw: str) -> Target:
        """Validate <raw> and return the Target it refers to."""
        target: Final[str] = raw.strip() if raw is not None else ""

        if target == "":
            raise InvalidTarget(target, "Target cannot be empty")
        if any(c.isspace() for c in target):
            raise InvalidTarget(target, "Target must not contain whitespace")

        addr = parse_literal(target)
        if addr is not None:
            self.log.debug("Target %s is a literal %s address.",
                           target,
                           "IPv4" if addr.version == 4 else "IPv6")
            return Target(raw=target, addr=addr, literal=True)

        bad: Final[list[str]] = sorted({c for c in target if c in shell_meta})
        if bad:
            raise InvalidTarget(target,
                                f"Target contains forbidden characters: {''.join(bad)}")

        name: Final[str] = check_hostname(target, target)

        with self.lock:
            if name in self.memo:
                return Target(raw=target, addr=self.memo[name], literal=False)

        addr = self._lookup(target, name)

        with self.lock:
            # Another thread may have beaten us to it, stick with the first answer.
            addr = self.memo.setdefault(name, addr)

        self.log.debug("Resolved %s to %s", name, addr)
        return Target(raw=target, addr=addr, literal=False)

    def _lookup(self, raw: str, name: str) -> Union[IPv4Address, IPv6Address]:
        """Ask the DNS, then the system resolver, for an address for <name>."""
        if self.res is not None:
            for rdtype in ("A", "AAAA"):
                try:
                    answer = self.res.resolve(name, rdtype)
                    for rdata in answer:
                        return ip_address(rdata.address)
                except NXDOMAIN as nx:
                    self.log.debug("DNS says %s does not exist: %s", name, nx)
                    break
                except NoAnswer:
                    continue
                except (NoNameservers, LifetimeTimeout, Timeout) as err:
                    self.log.info("%s looking up %s record for %s: %s",
                                  err.__class__.__name__,
                                  rdtype,
                                  name,
                                  err)
                    break
                except DNSException as err:
                    self.log.error("Unexpected %s looking up %s: %s",
                                   err.__class__.__name__,
                                   name,
                                   err)
                    break

        # dnspython knows nothing of /etc/hosts, so names like localhost only resolve here.
        try:
            infos = socket.getaddrinfo(name, None, type=socket.SOCK_STREAM)
        except (socket.gaierror, UnicodeError) as err:
            raise UnresolvableHost(raw, str(err)) from err

        for family, _, _, _, sockaddr in infos:
            if family in (socket.AF_INET, socket.AF_INET6):
                return ip_address(sockaddr[0].split("%", 1)[0])

        raise UnresolvableHost(raw, "No usable address found")


_default: Optional[TargetResolver] = None
_default_lock: Final[Lock] = Lock()


def resolve(raw: str) -> Target:
    """Resolve <raw> using a process-wide TargetResolver."""
    global _default  # pylint: disable-msg=W0603
    with _default_lock:
        if _default is None:
            _default = TargetResolver()
        res: Final[TargetResolver] = _default
    return res.resolve(raw)


# Local Variables: #
# python-indent: 4 #
# End: #

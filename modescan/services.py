#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# Time-stamp: <2026-10-13 17:30:26 krylon>
#
# /data/code/python/modescan/services.py
# created on 13. 10. 2026
# (c) 2026 Benjamin Walkenhorst
#
# This file is part of the modescan port scanner. It is distributed under the
# terms of the GNU General Public License 3. See the file LICENSE for details
# or find a copy online at https://www.gnu.org/licenses/gpl-3.0

"""
modescan.services

(c) 2026 Benjamin Walkenhorst
"""

from typing import Final, Optional

service_names: Final[dict[int, str]] = {
    20: "FTP Data",
    21: "FTP",
    22: "SSH",
    23: "Telnet",
    25: "SMTP",
    53: "DNS",
    69: "TFTP",
    79: "Finger",
    80: "HTTP",
    88: "Kerberos",
    110: "POP3",
    111: "RPCbind",
    113: "Ident",
    123: "NTP",
    135: "MSRPC",
    137: "NetBIOS-NS",
    138: "NetBIOS-DGM",
    139: "NetBIOS-SSN",
    143: "IMAP",
    161: "SNMP",
    162: "SNMP Trap",
    199: "SMUX",
    389: "LDAP",
    443: "HTTPS",
    445: "SMB",
    465: "SMTPS",
    587: "Submission",
    636: "LDAPS",
    989: "FTPS Data",
    990: "FTPS",
    993: "IMAPS",
    995: "POP3S",
    1433: "MSSQL",
    1434: "MSSQL Monitor",
    1521: "Oracle",
    1723: "PPTP",
    2049: "NFS",
    2082: "cPanel",
    2083: "cPanel SSL",
    2086: "WHM",
    2087: "WHM SSL",
    2095: "Webmail",
    2096: "Webmail SSL",
    3128: "Squid",
    3306: "MySQL",
    3389: "RDP",
    5432: "PostgreSQL",
    5800: "VNC HTTP",
    5900: "VNC",
    5901: "VNC-1",
    6000: "X11",
    6001: "X11-1",
    6379: "Redis",
    8000: "HTTP Alt",
    8008: "HTTP Alt",
    8080: "HTTP Proxy",
    8443: "HTTPS Alt",
    8888: "HTTP Alt",
    9100: "JetDirect",
    10000: "Webmin",
    27017: "MongoDB",
}


def lookup(port: int) -> Optional[str]:
    """Return the name of the service usually found on <port>, if we know one."""
    return service_names.get(port)


# Local Variables: #
# python-indent: 4 #
# End: #

#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# Time-stamp: <2026-10-12 14:02:11 krylon>
#
# /data/code/python/modescan/__init__.py
# created on 12. 10. 2026
# (c) 2026 Benjamin Walkenhorst
#
# This file is part of the modescan port scanner. It is distributed under the
# terms of the GNU General Public License 3. See the file LICENSE for details
# or find a copy online at https://www.gnu.org/licenses/gpl-3.0

"""
modescan.__init__

(c) 2026 Benjamin Walkenhorst
"""

# Local Variables: #
# python-indent: 4 #
# End: #

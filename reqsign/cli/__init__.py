#
# The reqsign module signs outgoing HTTP requests.
#
# Copyright (C) 2024-2026 reqsign contributors
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License as
# published by the Free Software Foundation, either version 3 of the
# License, or (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU Affero General Public License for more details.
#
# You should have received a copy of the GNU Affero General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

"""
reqsign.cli
~~~~~~~~~~~

:copyright: (C) 2024-2026 by reqsign contributors.
:license: AGPL 3, see LICENSE for more details.
"""
from reqsign.cli import cli_utils, rs, rs_sign

__all__ = [
    'rs',
    'rs_sign',
    'cli_utils',
]

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
reqsign.signers.basic
~~~~~~~~~~~~~~~~~~~~~

HTTP Basic authentication (RFC 7617).

:copyright: (C) 2024-2026 by reqsign contributors.
:license: AGPL 3, see LICENSE for more details.
"""
from __future__ import annotations

from reqsign.exceptions import BadRequestAuthorizationError
from reqsign.utils import b64encode


def basic_authorization(username: str, password: str) -> str:
    """Build the value of a Basic ``Authorization`` header."""
    if username is None or password is None:
        raise BadRequestAuthorizationError('Basic authorization needs a username and a password.')
    credentials = f'{username}:{password}'.encode('utf-8')
    return f'Basic {b64encode(credentials)}'


def sign(authorization, method, url, headers, parameters, context):
    return {'Authorization': basic_authorization(authorization.username,
                                                 authorization.password)}

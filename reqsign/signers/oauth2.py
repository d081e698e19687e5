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
reqsign.signers.oauth2
~~~~~~~~~~~~~~~~~~~~~~

OAuth 2.0 bearer tokens (RFC 6750), bare bearer tokens and API keys.

:copyright: (C) 2024-2026 by reqsign contributors.
:license: AGPL 3, see LICENSE for more details.
"""
from __future__ import annotations

from reqsign.exceptions import BadRequestAuthorizationError


def bearer_authorization(access_token: str | None, token_type: str = 'Bearer') -> str:
    if not access_token:
        raise BadRequestAuthorizationError('A bearer access token is required.')
    return f'{token_type} {access_token}'


def sign_oauth2(authorization, method, url, headers, parameters, context):
    return {'Authorization': bearer_authorization(authorization.access_token,
                                                  authorization.token_type or 'Bearer')}


def sign_bearer(authorization, method, url, headers, parameters, context):
    return {'Authorization': bearer_authorization(authorization.token)}


def sign_api_key(authorization, method, url, headers, parameters, context):
    """Send the key as a header. GET requests never get here, the
    assembler moves the key into the query string for them.
    """
    if not authorization.key:
        raise BadRequestAuthorizationError('An API key name is required.')
    return {authorization.key: authorization.value}

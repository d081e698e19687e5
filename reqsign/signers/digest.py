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
reqsign.signers.digest
~~~~~~~~~~~~~~~~~~~~~~

HTTP Digest authentication, RFC 2069 and the RFC 2617 ``qop`` extension.

The server's ``realm`` and ``nonce`` are supplied by the caller; no
challenge parsing happens here.

:copyright: (C) 2024-2026 by reqsign contributors.
:license: AGPL 3, see LICENSE for more details.
"""
from __future__ import annotations

from reqsign.utils import md5_hex


def _has_qop(qop, nc, cnonce) -> bool:
    # qop, nc and cnonce only count as a set.
    return qop is not None and nc is not None and cnonce is not None


def digest_response(username: str,
                    password: str,
                    realm: str,
                    nonce: str,
                    uri: str,
                    method: str,
                    qop: str | None = None,
                    nc: str | None = None,
                    cnonce: str | None = None) -> str:
    """Compute the ``response`` field of a Digest header.

    :returns: The lowercase hex MD5 response digest.
    """
    ha1 = md5_hex(f'{username}:{realm}:{password}')
    ha2 = md5_hex(f'{method}:{uri}')
    if _has_qop(qop, nc, cnonce):
        return md5_hex(f'{ha1}:{nonce}:{nc}:{cnonce}:{qop}:{ha2}')
    return md5_hex(f'{ha1}:{nonce}:{ha2}')


def digest_authorization(username: str,
                         password: str,
                         realm: str,
                         nonce: str,
                         uri: str,
                         method: str,
                         qop: str | None = None,
                         nc: str | None = None,
                         cnonce: str | None = None) -> str:
    """Build the value of a Digest ``Authorization`` header."""
    response = digest_response(username, password, realm, nonce, uri, method,
                               qop=qop, nc=nc, cnonce=cnonce)
    header = (f'Digest username="{username}", realm="{realm}", nonce="{nonce}", '
              f'uri="{uri}", response="{response}"')
    if _has_qop(qop, nc, cnonce):
        header += f', qop={qop}, nc={nc}, cnonce="{cnonce}"'
    return header


def sign(authorization, method, url, headers, parameters, context):
    return {
        'Authorization': digest_authorization(
            authorization.username,
            authorization.password,
            authorization.realm,
            authorization.nonce,
            authorization.uri,
            method,
            qop=authorization.qop,
            nc=authorization.nc,
            cnonce=authorization.cnonce,
        )
    }

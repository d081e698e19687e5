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
reqsign.signers.hawk
~~~~~~~~~~~~~~~~~~~~

Hawk header authentication.

The payload hash and ``ext`` fields of the normalized string are always
empty: payload binding is not supported.

:copyright: (C) 2024-2026 by reqsign contributors.
:license: AGPL 3, see LICENSE for more details.
"""
from __future__ import annotations

from reqsign.authorization import HawkAlgorithm
from reqsign.models import SigningContext
from reqsign.utils import b64encode, hmac_sha1, hmac_sha256, split_url, url_port

HAWK_HEADER_VERSION = 'hawk.1.header'


def hawk_resource(url: str) -> str:
    parts = split_url(url)
    resource = parts.path
    if parts.query:
        resource += f'?{parts.query}'
    return resource


def normalized_string(timestamp: str,
                      nonce: str,
                      method: str,
                      resource: str,
                      host: str,
                      port: int) -> str:
    fields = [
        HAWK_HEADER_VERSION,
        timestamp,
        nonce,
        method.upper(),
        resource,
        host.lower(),
        str(port),
        '',  # payload hash
        '',  # ext
    ]
    return '\n'.join(fields) + '\n'


def hawk_mac(normalized: str, key: str, algorithm: HawkAlgorithm) -> str:
    if HawkAlgorithm(algorithm) is HawkAlgorithm.SHA1:
        return b64encode(hmac_sha1(key, normalized))
    return b64encode(hmac_sha256(key, normalized))


def hawk_authorization(id: str,
                       key: str,
                       algorithm: HawkAlgorithm,
                       method: str,
                       url: str,
                       host: str,
                       port: int,
                       context: SigningContext | None = None) -> str:
    """Build the value of an ``Authorization: Hawk ...`` header.

    :raises BadURLError: if ``url`` cannot be parsed.
    """
    context = context or SigningContext()
    resource = hawk_resource(url)
    timestamp = str(context.timestamp())
    nonce = context.nonce().replace('-', '')
    mac = hawk_mac(normalized_string(timestamp, nonce, method, resource, host, port),
                   key, algorithm)
    return f'Hawk id="{id}", ts="{timestamp}", nonce="{nonce}", mac="{mac}"'


def sign(authorization, method, url, headers, parameters, context):
    parts = split_url(url)
    return {
        'Authorization': hawk_authorization(
            authorization.id,
            authorization.key,
            authorization.algorithm,
            method,
            url,
            parts.hostname,
            url_port(parts),
            context=context,
        )
    }

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
reqsign.signers.aws
~~~~~~~~~~~~~~~~~~~

AWS Signature Version 4 header signing.

The payload is always hashed as empty; request bodies are not covered by
the signature.

:copyright: (C) 2024-2026 by reqsign contributors.
:license: AGPL 3, see LICENSE for more details.
"""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Mapping

from reqsign.models import SigningContext
from reqsign.utils import (
    DEFAULT_PORTS,
    aws_encode,
    hmac_sha256,
    parse_query_items,
    sha256_hex,
    split_url,
)

logger = logging.getLogger(__name__)

ALGORITHM = 'AWS4-HMAC-SHA256'
TERMINATOR = 'aws4_request'
EMPTY_PAYLOAD_HASH = sha256_hex(b'')


def amz_dates(now: datetime) -> tuple[str, str]:
    """``(amz_date, date_stamp)`` for ``now`` in UTC."""
    now = now.astimezone(timezone.utc)
    return now.strftime('%Y%m%dT%H%M%SZ'), now.strftime('%Y%m%d')


def credential_scope(date_stamp: str, region: str, service: str) -> str:
    return f'{date_stamp}/{region}/{service}/{TERMINATOR}'


def host_header(url: str) -> str:
    parts = split_url(url)
    host = parts.hostname
    if parts.port is not None and parts.port != DEFAULT_PORTS.get(parts.scheme.lower()):
        host = f'{host}:{parts.port}'
    return host


def canonical_query_string(query: str) -> str:
    items = sorted((aws_encode(k), aws_encode(v)) for k, v in parse_query_items(query))
    return '&'.join(f'{k}={v}' for k, v in items)


def signed_headers(headers: Mapping[str, str]) -> str:
    return ';'.join(sorted(k.lower() for k in headers))


def canonical_headers(headers: Mapping[str, str]) -> str:
    lines = sorted((k.lower(), str(v).strip()) for k, v in headers.items())
    return ''.join(f'{k}:{v}\n' for k, v in lines)


def canonical_request(method: str, url: str, headers: Mapping[str, str]) -> str:
    parts = split_url(url)
    return '\n'.join([
        method.upper(),
        parts.path or '/',
        canonical_query_string(parts.query),
        canonical_headers(headers),
        signed_headers(headers),
        EMPTY_PAYLOAD_HASH,
    ])


def string_to_sign(amz_date: str, scope: str, canonical: str) -> str:
    return '\n'.join([
        ALGORITHM,
        amz_date,
        scope,
        sha256_hex(canonical),
    ])


def derive_signing_key(secret_key: str, date_stamp: str, region: str, service: str) -> bytes:
    """Run the four stage HMAC key derivation.

    Every stage hands its raw digest to the next one as the key.
    """
    k_date = hmac_sha256(f'AWS4{secret_key}', date_stamp)
    k_region = hmac_sha256(k_date, region)
    k_service = hmac_sha256(k_region, service)
    return hmac_sha256(k_service, TERMINATOR)


def aws_signature_headers(access_key: str,
                          secret_key: str,
                          region: str,
                          service: str,
                          session_token: str | None,
                          method: str,
                          url: str,
                          headers: Mapping[str, str] | None = None,
                          context: SigningContext | None = None) -> dict[str, str]:
    """Sign a request and return its complete header set.

    The returned mapping holds the given ``headers`` plus ``Host``,
    ``X-Amz-Date``, ``X-Amz-Security-Token`` (with a session token) and
    ``Authorization``.

    :raises BadURLError: if ``url`` cannot be parsed.
    """
    context = context or SigningContext()
    host = host_header(url)
    amz_date, date_stamp = amz_dates(context.clock())

    # Drop case variants of the headers we are about to set.
    injected = {'host', 'x-amz-date', 'x-amz-security-token', 'authorization'}
    aws_headers = {k: v for k, v in (headers or {}).items() if k.lower() not in injected}
    aws_headers['Host'] = host
    aws_headers['X-Amz-Date'] = amz_date
    if session_token is not None:
        aws_headers['X-Amz-Security-Token'] = session_token

    scope = credential_scope(date_stamp, region, service)
    canonical = canonical_request(method, url, aws_headers)
    to_sign = string_to_sign(amz_date, scope, canonical)
    key = derive_signing_key(secret_key, date_stamp, region, service)
    signature = hmac_sha256(key, to_sign).hex()

    names = signed_headers(aws_headers)
    logger.debug(f'signed aws4 request for {service}/{region}, signed headers: {names}')
    aws_headers['Authorization'] = (f'{ALGORITHM} Credential={access_key}/{scope}, '
                                    f'SignedHeaders={names}, Signature={signature}')
    return aws_headers


def sign(authorization, method, url, headers, parameters, context):
    return aws_signature_headers(
        authorization.access_key,
        authorization.secret_key,
        authorization.region,
        authorization.service,
        authorization.session_token,
        method,
        url,
        headers=headers,
        context=context,
    )

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
reqsign.signers.oauth1
~~~~~~~~~~~~~~~~~~~~~~

OAuth 1.0 request signing (RFC 5849).

The signature base string and the signature itself are exposed so a
receiver holding the same secrets can recompute and check a signature.

:copyright: (C) 2024-2026 by reqsign contributors.
:license: AGPL 3, see LICENSE for more details.
"""
from __future__ import annotations

import logging
from typing import Iterable, Mapping

from reqsign.authorization import OAuth1SignatureMethod
from reqsign.models import SigningContext
from reqsign.utils import (
    DEFAULT_PORTS,
    b64encode,
    hmac_sha1,
    hmac_sha256,
    parse_query_items,
    percent_encode,
    split_url,
    stringify_value,
)

logger = logging.getLogger(__name__)

OAUTH_VERSION = '1.0'


def base_string_uri(url: str) -> str:
    """Scheme, authority and path of ``url`` as RFC 5849 section 3.4.1.2
    wants them: lowercase scheme and host, default port dropped, no query.
    """
    parts = split_url(url)
    scheme = parts.scheme.lower()
    host = parts.hostname.lower()
    if parts.port is not None and parts.port != DEFAULT_PORTS.get(scheme):
        host = f'{host}:{parts.port}'
    path = parts.path or '/'
    return f'{scheme}://{host}{path}'


def collect_parameters(url: str,
                       oauth_params: Mapping[str, str],
                       parameters: Mapping | None = None) -> dict[str, str]:
    """Merge the oauth, query and body parameters into one string mapping.

    Body parameters with a ``None`` value are left out.
    """
    parts = split_url(url)
    collected = dict(oauth_params)
    for name, value in parse_query_items(parts.query):
        collected[name] = value
    for name, value in (parameters or {}).items():
        if value is None:
            continue
        collected[name] = stringify_value(value)
    return collected


def normalize_parameters(params: Iterable[tuple[str, str]]) -> str:
    encoded = sorted((percent_encode(k), percent_encode(v)) for k, v in params)
    return '&'.join(f'{k}={v}' for k, v in encoded)


def signature_base_string(method: str, url: str, params: Mapping[str, str]) -> str:
    return '&'.join([
        percent_encode(method.upper()),
        percent_encode(base_string_uri(url)),
        percent_encode(normalize_parameters(params.items())),
    ])


def signing_key(consumer_secret: str, token_secret: str | None = None) -> str:
    return f'{percent_encode(consumer_secret)}&{percent_encode(token_secret or "")}'


def sign_base_string(base_string: str, key: str,
                     signature_method: OAuth1SignatureMethod) -> str:
    signature_method = OAuth1SignatureMethod(signature_method)
    if signature_method is OAuth1SignatureMethod.HMAC_SHA1:
        return b64encode(hmac_sha1(key, base_string))
    if signature_method is OAuth1SignatureMethod.HMAC_SHA256:
        return b64encode(hmac_sha256(key, base_string))
    return key


def oauth1_authorization(consumer_key: str,
                         consumer_secret: str,
                         token: str | None,
                         token_secret: str | None,
                         signature_method: OAuth1SignatureMethod,
                         method: str,
                         url: str,
                         parameters: Mapping | None = None,
                         context: SigningContext | None = None) -> str:
    """Build the value of an ``Authorization: OAuth ...`` header.

    :param parameters: Request parameters, included in the signature.

    :param context: Supplies ``oauth_timestamp`` and ``oauth_nonce``.

    :raises BadURLError: if ``url`` cannot be parsed.
    """
    context = context or SigningContext()
    # Validate the URL before anything is hashed.
    split_url(url)

    oauth_params = {
        'oauth_consumer_key': consumer_key,
        'oauth_nonce': context.nonce(),
        'oauth_signature_method': OAuth1SignatureMethod(signature_method).value,
        'oauth_timestamp': str(context.timestamp()),
        'oauth_version': OAUTH_VERSION,
    }
    if token is not None:
        oauth_params['oauth_token'] = token

    params = collect_parameters(url, oauth_params, parameters)
    base_string = signature_base_string(method, url, params)
    oauth_params['oauth_signature'] = sign_base_string(
        base_string,
        signing_key(consumer_secret, token_secret),
        signature_method,
    )
    logger.debug(f'signed oauth1 request with {oauth_params["oauth_signature_method"]}')

    header_params = ', '.join(
        f'{k}="{percent_encode(v)}"' for k, v in sorted(oauth_params.items())
    )
    return f'OAuth {header_params}'


def sign(authorization, method, url, headers, parameters, context):
    return {
        'Authorization': oauth1_authorization(
            authorization.consumer_key,
            authorization.consumer_secret,
            authorization.token,
            authorization.token_secret,
            authorization.signature_method,
            method,
            url,
            parameters=parameters,
            context=context,
        )
    }

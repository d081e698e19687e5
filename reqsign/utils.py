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
reqsign.utils
~~~~~~~~~~~~~

Hash and HMAC primitives, percent-encoders and small helpers shared by
the scheme signers and the request assembler.

:copyright: (C) 2024-2026 by reqsign contributors.
:license: AGPL 3, see LICENSE for more details.
"""
from __future__ import annotations

import base64
import hashlib
import hmac
from collections.abc import Mapping
from urllib.parse import quote, unquote, urlsplit, urlunsplit

from reqsign.exceptions import BadURLError

# RFC 3986 section 2.3. quote() always leaves ASCII letters and digits alone.
UNRESERVED_SAFE = '-._~'

DEFAULT_PORTS = {
    'http': 80,
    'https': 443,
}


def _to_bytes(data: bytes | str) -> bytes:
    if isinstance(data, str):
        return data.encode('utf-8')
    return data


def md5_hex(data: bytes | str) -> str:
    return hashlib.md5(_to_bytes(data)).hexdigest()


def sha1_hex(data: bytes | str) -> str:
    return hashlib.sha1(_to_bytes(data)).hexdigest()


def sha256_hex(data: bytes | str) -> str:
    return hashlib.sha256(_to_bytes(data)).hexdigest()


def hmac_sha1(key: bytes | str, msg: bytes | str) -> bytes:
    return hmac.new(_to_bytes(key), _to_bytes(msg), hashlib.sha1).digest()


def hmac_sha256(key: bytes | str, msg: bytes | str) -> bytes:
    return hmac.new(_to_bytes(key), _to_bytes(msg), hashlib.sha256).digest()


def b64encode(digest: bytes) -> str:
    return base64.b64encode(digest).decode('ascii')


def percent_encode(s: str) -> str:
    """Percent-encode everything outside the RFC 3986 unreserved set.

    Used for OAuth 1.0 signature base strings, signing keys and header
    values.
    """
    return quote(s, safe=UNRESERVED_SAFE)


def aws_encode(s: str) -> str:
    """Percent-encode a canonical query name or value for SigV4.

    AWS escapes every byte except the unreserved set, spaces become
    ``%20`` and ``/`` is escaped too.
    """
    return quote(s, safe=UNRESERVED_SAFE)


def stringify_value(value) -> str:
    """Render a scalar parameter value as it appears in a query string."""
    if value is None:
        return ''
    if isinstance(value, bool):
        return 'true' if value else 'false'
    return str(value)


def parse_query_items(query: str) -> list[tuple[str, str]]:
    """Split a raw query string into decoded ``(name, value)`` pairs.

    Unlike :func:`urllib.parse.parse_qsl` a literal ``+`` is kept as is
    rather than turned into a space.
    """
    items = []
    for part in query.split('&'):
        if not part:
            continue
        name, _, value = part.partition('=')
        items.append((unquote(name), unquote(value)))
    return items


def split_url(url: str):
    """Parse ``url`` and make sure it has a scheme and a host.

    :raises BadURLError: if the URL is empty or cannot be parsed.
    """
    if not url:
        raise BadURLError('URL is empty.')
    try:
        parts = urlsplit(url)
        # Accessing .port validates it.
        parts.port
    except ValueError as exc:
        raise BadURLError(f'Could not parse URL {url!r}: {exc}')
    if not parts.scheme or not parts.hostname:
        raise BadURLError(f'URL {url!r} has no scheme or host.')
    return parts


def redact_url(url: str) -> str:
    """``url`` with every query value replaced by ``***``, for logging.

    Query values can hold API keys and URL signatures.
    """
    parts = urlsplit(url)
    if not parts.query:
        return url
    masked = '&'.join(f'{part.partition("=")[0]}=***' for part in parts.query.split('&') if part)
    return urlunsplit(parts._replace(query=masked))


def url_port(parts) -> int:
    """Explicit port of a split URL, or the scheme's default port."""
    if parts.port is not None:
        return parts.port
    return DEFAULT_PORTS.get(parts.scheme.lower(), 80)


def deep_update(d: dict, u: Mapping) -> dict:
    for k, v in u.items():
        if isinstance(v, Mapping):
            r = deep_update(d.get(k, {}), v)
            d[k] = r
        else:
            d[k] = u[k]
    return d

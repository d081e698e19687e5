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
reqsign.authorization
~~~~~~~~~~~~~~~~~~~~~

Authorization variants. Each variant is an immutable value carrying
exactly the credentials its scheme needs; the signers in
:mod:`reqsign.signers` are keyed by variant type.

:copyright: (C) 2024-2026 by reqsign contributors.
:license: AGPL 3, see LICENSE for more details.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union


class OAuth1SignatureMethod(str, Enum):
    HMAC_SHA1 = 'HMAC-SHA1'
    HMAC_SHA256 = 'HMAC-SHA256'
    PLAINTEXT = 'PLAINTEXT'


class HawkAlgorithm(str, Enum):
    SHA1 = 'sha1'
    SHA256 = 'sha256'


def _mask(value: str | None) -> str:
    if not value:
        return '<none>'
    return '***'


@dataclass(frozen=True)
class BasicAuthorization:
    username: str
    password: str

    def redacted(self) -> str:
        return f'basic(username={self.username!r}, password={_mask(self.password)})'


@dataclass(frozen=True)
class DigestAuthorization:
    """RFC 2069 digest credentials, or RFC 2617 when ``qop``, ``nc`` and
    ``cnonce`` are all given.

    ``realm`` and ``nonce`` come from the server's challenge; they are
    never negotiated here.
    """

    username: str
    password: str
    realm: str
    nonce: str
    uri: str
    qop: str | None = None
    nc: str | None = None
    cnonce: str | None = None

    def redacted(self) -> str:
        return (f'digest(username={self.username!r}, realm={self.realm!r}, '
                f'uri={self.uri!r}, password={_mask(self.password)})')


@dataclass(frozen=True)
class BearerToken:
    token: str | None

    def redacted(self) -> str:
        return f'bearer(token={_mask(self.token)})'


@dataclass(frozen=True)
class APIKeyAuthorization:
    key: str
    value: str

    def redacted(self) -> str:
        return f'api-key(key={self.key!r}, value={_mask(self.value)})'


@dataclass(frozen=True)
class OAuth1Authorization:
    consumer_key: str
    consumer_secret: str
    token: str | None = None
    token_secret: str | None = None
    signature_method: OAuth1SignatureMethod = OAuth1SignatureMethod.HMAC_SHA1

    def redacted(self) -> str:
        return (f'oauth1(consumer_key={self.consumer_key!r}, '
                f'method={OAuth1SignatureMethod(self.signature_method).value}, '
                f'token={_mask(self.token)})')


@dataclass(frozen=True)
class OAuth2Authorization:
    access_token: str
    token_type: str = 'Bearer'

    def redacted(self) -> str:
        return f'oauth2(token_type={self.token_type!r}, access_token={_mask(self.access_token)})'


@dataclass(frozen=True)
class HawkAuthorization:
    id: str
    key: str
    algorithm: HawkAlgorithm = HawkAlgorithm.SHA256

    def redacted(self) -> str:
        return (f'hawk(id={self.id!r}, algorithm={HawkAlgorithm(self.algorithm).value}, '
                f'key={_mask(self.key)})')


@dataclass(frozen=True)
class AWSSignatureV4Authorization:
    access_key: str
    secret_key: str
    region: str
    service: str
    session_token: str | None = None

    def redacted(self) -> str:
        return (f'aws4(access_key={self.access_key!r}, region={self.region!r}, '
                f'service={self.service!r}, secret_key={_mask(self.secret_key)})')


AuthorizationSpec = Union[
    BasicAuthorization,
    DigestAuthorization,
    BearerToken,
    APIKeyAuthorization,
    OAuth1Authorization,
    OAuth2Authorization,
    HawkAuthorization,
    AWSSignatureV4Authorization,
]


@dataclass(frozen=True)
class MD5Signature:
    """Appends ``signature=<md5 hex of secret>`` to the request URL."""

    secret: str


@dataclass(frozen=True)
class PlainSignature:
    """Sends ``keyword`` verbatim in a ``Signature`` header."""

    keyword: str


URLSignature = Union[MD5Signature, PlainSignature]

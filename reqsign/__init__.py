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
reqsign Library
~~~~~~~~~~~~~~~

reqsign builds signed HTTP requests for Basic, Digest, OAuth 1.0,
OAuth 2.0 bearer, Hawk and AWS Signature Version 4 authorization.

Usage::

    >>> from reqsign import PendingRequest, DigestAuthorization, build_request
    >>> auth = DigestAuthorization('testuser', 'testpass', 'test@example.com',
    ...                            'dcd98b7102dd2f0e8b11d0f600bfb0c093', '/protected')
    >>> p = build_request(PendingRequest('https://example.com/protected', 'GET',
    ...                                  authorization=auth))
    >>> p.headers['Authorization'].startswith('Digest')
    True

:copyright: (C) 2024-2026 by reqsign contributors.
:license: AGPL 3, see LICENSE for more details.
"""

__title__ = 'reqsign'
__author__ = 'reqsign contributors'
__license__ = 'AGPL 3'
__copyright__ = 'Copyright (C) 2024-2026 reqsign contributors'

from .__version__ import __version__  # isort:skip
from reqsign.auth import SignatureAuth
from reqsign.authorization import (
    APIKeyAuthorization,
    AWSSignatureV4Authorization,
    BasicAuthorization,
    BearerToken,
    DigestAuthorization,
    HawkAlgorithm,
    HawkAuthorization,
    MD5Signature,
    OAuth1Authorization,
    OAuth1SignatureMethod,
    OAuth2Authorization,
    PlainSignature,
)
from reqsign.connectivity import ConnectionState, ConnectivityRegistry
from reqsign.exceptions import (
    BadRequestAuthorizationError,
    BadRequestParametersError,
    BadURLError,
    JSONFormatError,
    RequestBuildError,
    UnsupportedAuthorizationError,
)
from reqsign.models import CachePolicy, Method, PendingRequest, SigningContext
from reqsign.request import SignedPreparedRequest, SignedRequest, build_request
from reqsign.session import SigningSession
from reqsign.signers import sign

__all__ = [
    '__version__',

    # Classes.
    'SigningSession',
    'SignedRequest',
    'SignedPreparedRequest',
    'SignatureAuth',
    'PendingRequest',
    'SigningContext',
    'ConnectivityRegistry',

    # Enums.
    'Method',
    'CachePolicy',
    'OAuth1SignatureMethod',
    'HawkAlgorithm',
    'ConnectionState',

    # Authorization variants.
    'BasicAuthorization',
    'DigestAuthorization',
    'BearerToken',
    'APIKeyAuthorization',
    'OAuth1Authorization',
    'OAuth2Authorization',
    'HawkAuthorization',
    'AWSSignatureV4Authorization',
    'MD5Signature',
    'PlainSignature',

    # Exceptions.
    'RequestBuildError',
    'BadURLError',
    'BadRequestAuthorizationError',
    'UnsupportedAuthorizationError',
    'BadRequestParametersError',
    'JSONFormatError',

    # API.
    'build_request',
    'sign',
]


# Set default logging handler to avoid "No handler found" warnings.
import logging

log = logging.getLogger(__name__)
log.addHandler(logging.NullHandler())

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
reqsign.signers
~~~~~~~~~~~~~~~

One module per authorization scheme. Every module exposes a
``sign(authorization, method, url, headers, parameters, context)``
function returning the headers to merge into the request;
:func:`sign` picks the right one from the authorization's type.

:copyright: (C) 2024-2026 by reqsign contributors.
:license: AGPL 3, see LICENSE for more details.
"""
from __future__ import annotations

import logging
from typing import Mapping

from reqsign.authorization import (
    APIKeyAuthorization,
    AWSSignatureV4Authorization,
    BasicAuthorization,
    BearerToken,
    DigestAuthorization,
    HawkAuthorization,
    OAuth1Authorization,
    OAuth2Authorization,
)
from reqsign.exceptions import UnsupportedAuthorizationError
from reqsign.models import SigningContext
from reqsign.signers import aws, basic, digest, hawk, oauth1, oauth2

logger = logging.getLogger(__name__)

SIGNER_TABLE = {
    BasicAuthorization: basic.sign,
    DigestAuthorization: digest.sign,
    BearerToken: oauth2.sign_bearer,
    APIKeyAuthorization: oauth2.sign_api_key,
    OAuth1Authorization: oauth1.sign,
    OAuth2Authorization: oauth2.sign_oauth2,
    HawkAuthorization: hawk.sign,
    AWSSignatureV4Authorization: aws.sign,
}


def sign(authorization,
         method: str,
         url: str,
         headers: Mapping[str, str] | None = None,
         parameters: Mapping | None = None,
         context: SigningContext | None = None) -> dict[str, str]:
    """Compute the headers ``authorization`` adds to a request.

    :raises UnsupportedAuthorizationError: for an unknown authorization type.
    """
    signer = SIGNER_TABLE.get(type(authorization))
    if signer is None:
        raise UnsupportedAuthorizationError(
            f'No signer for authorization type {type(authorization).__name__}.'
        )
    logger.debug(f'signing {method} request with {type(authorization).__name__}')
    return signer(authorization, method, url, dict(headers or {}), parameters,
                  context or SigningContext())

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
reqsign.auth
~~~~~~~~~~~~

This module contains the authentication handler for Requests. It runs
the matching scheme signer on a fully prepared request and merges the
resulting headers.

:copyright: (C) 2024-2026 by reqsign contributors.
:license: AGPL 3, see LICENSE for more details.
"""
from __future__ import annotations

from requests.auth import AuthBase

from reqsign import signers


class SignatureAuth(AuthBase):
    """Attaches the headers of any supported authorization scheme to the
    given Request object.

    Usage::

        >>> import requests
        >>> from reqsign import SignatureAuth, HawkAuthorization
        >>> auth = SignatureAuth(HawkAuthorization('hawk_id', 'secret'))
        >>> r = requests.get('https://example.com/resource', auth=auth)
    """
    def __init__(self, authorization, parameters=None, context=None):
        self.authorization = authorization
        self.parameters = parameters
        self.context = context

    def __call__(self, r):
        signed = signers.sign(self.authorization,
                              r.method,
                              r.url,
                              headers=r.headers,
                              parameters=self.parameters,
                              context=self.context)
        r.headers.update(signed)
        return r

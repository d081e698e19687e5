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
reqsign.request
~~~~~~~~~~~~~~~

Turns a :class:`~reqsign.models.PendingRequest` into a signed
:class:`requests.PreparedRequest`.

The request moves through a fixed pipeline, each step failing the whole
build on error:

1. the raw URL is percent-encoded and validated,
2. an optional URL signature is applied,
3. GET and DELETE parameters are attached to the query string,
   POST, PUT and PATCH parameters become a JSON body,
4. the authorization scheme signs the request and its headers are merged.

Signing runs last so the signature covers the final URL.

:copyright: (C) 2024-2026 by reqsign contributors.
:license: AGPL 3, see LICENSE for more details.
"""
from __future__ import annotations

import json
import logging
from urllib.parse import quote, urlencode, urlsplit, urlunsplit

import requests
import requests.models
from requests.exceptions import InvalidURL, MissingSchema
from requests.utils import requote_uri

from reqsign.auth import SignatureAuth
from reqsign.authorization import APIKeyAuthorization, MD5Signature, PlainSignature
from reqsign.exceptions import BadRequestParametersError, BadURLError
from reqsign.models import DEFAULT_TIMEOUT, CachePolicy, Method, PendingRequest
from reqsign.utils import md5_hex, redact_url, split_url, stringify_value

logger = logging.getLogger(__name__)

# Characters left alone in query names and values. '&', '=' and '#' are
# always escaped.
QUERY_SAFE = "!$'()*+,;:@/?"

SUPPORTED_SCHEMES = ('http', 'https')


def encode_url(raw_url: str) -> str:
    """Percent-encode ``raw_url`` for query safety and validate it.

    Characters that may not appear in a URL (spaces, non-ASCII text, ...)
    are escaped; valid escapes already present are kept.

    :raises BadURLError: if the result is not an absolute http(s) URL.
    """
    if not raw_url:
        raise BadURLError('URL is empty.')
    encoded = requote_uri(raw_url)
    parts = split_url(encoded)
    if parts.scheme.lower() not in SUPPORTED_SCHEMES:
        raise BadURLError(f'Unsupported URL scheme {parts.scheme!r} in {raw_url!r}.')
    return encoded


def encode_query(parameters) -> str:
    pairs = [(k, stringify_value(v)) for k, v in parameters.items()]
    query = urlencode(pairs, quote_via=quote, safe=QUERY_SAFE)
    # Servers read a bare '+' as a space.
    return query.replace('+', '%2B')


def append_query(url: str, query: str) -> str:
    if not query:
        return url
    parts = urlsplit(url)
    if parts.query:
        query = f'{parts.query}&{query}'
    return urlunsplit(parts._replace(query=query))


def apply_url_signature(url: str, signature) -> str:
    if isinstance(signature, MD5Signature):
        return append_query(url, f'signature={md5_hex(signature.secret)}')
    return url


class SignedRequest(requests.models.Request):
    def __init__(self,
                 authorization=None,
                 parameters=None,
                 timeout=DEFAULT_TIMEOUT,
                 cache_policy=CachePolicy.USE_PROTOCOL_CACHE_POLICY,
                 signature=None,
                 context=None,
                 **kwargs):

        super().__init__(**kwargs)

        self.authorization = authorization
        self.parameters = parameters
        self.timeout = timeout
        self.cache_policy = cache_policy
        self.signature = signature
        self.context = context

    @classmethod
    def from_pending(cls, pending: PendingRequest, headers=None, signature=None,
                     context=None) -> SignedRequest:
        return cls(
            method=Method(pending.method).value,
            url=pending.base_url,
            headers=headers,
            authorization=pending.authorization,
            parameters=pending.parameters,
            timeout=DEFAULT_TIMEOUT if pending.timeout is None else pending.timeout,
            cache_policy=pending.cache_policy,
            signature=signature,
            context=context,
        )

    def prepare(self):
        p = SignedPreparedRequest()
        p.prepare(
            method=self.method,
            url=self.url,
            headers=self.headers,
            hooks=self.hooks,

            # SignedRequest kwargs.
            authorization=self.authorization,
            parameters=self.parameters,
            timeout=self.timeout,
            cache_policy=self.cache_policy,
            signature=self.signature,
            context=self.context,
        )
        return p


class SignedPreparedRequest(requests.models.PreparedRequest):
    def __init__(self):
        super().__init__()
        self.timeout = None
        self.cache_policy = None

    def prepare(self, method=None, url=None, headers=None, hooks=None,
                authorization=None, parameters=None, timeout=None, cache_policy=None,
                signature=None, context=None):
        method = Method(method)
        self.prepare_method(method.value)

        # Fail on a bad URL before any parameter or credential is looked at.
        url = apply_url_signature(encode_url(url), signature)

        if parameters is not None:
            parameters = dict(parameters)
        if isinstance(authorization, APIKeyAuthorization) and method is Method.GET:
            parameters = parameters or {}
            parameters[authorization.key] = authorization.value
            authorization = None

        self.prepare_url(url, None if method.has_body else parameters)
        self.prepare_headers(headers, signature)
        self.prepare_cookies(None)
        self.prepare_json_body(parameters if method.has_body else None)
        if authorization is not None:
            self.prepare_auth(SignatureAuth(authorization, parameters, context), url)
        # Note that prepare_auth must be last so the signers see the
        # final URL and headers.

        # This MUST go after prepare_auth. Authenticators could add a hook
        self.prepare_hooks(hooks)

        self.timeout = timeout
        self.cache_policy = cache_policy
        logger.debug(f'prepared {self.method} request for {redact_url(self.url)}')

    def prepare_url(self, url, params):
        if params:
            url = append_query(url, encode_query(params))
        try:
            super().prepare_url(url, None)
        except (InvalidURL, MissingSchema) as exc:
            raise BadURLError(str(exc))

    def prepare_headers(self, headers, signature=None):
        headers = dict(headers) if headers else {}
        headers['Content-Type'] = 'application/json'
        if isinstance(signature, PlainSignature):
            headers['Signature'] = signature.keyword
        super().prepare_headers(headers)

    def prepare_json_body(self, parameters):
        if parameters is None:
            self.prepare_body(None, None)
            return
        try:
            body = json.dumps(parameters, allow_nan=False).encode('utf-8')
        except (TypeError, ValueError) as exc:
            raise BadRequestParametersError(parameters) from exc
        self.body = body
        self.prepare_content_length(body)

    def copy(self):
        p = super().copy()
        p.timeout = self.timeout
        p.cache_policy = self.cache_policy
        return p


def build_request(pending: PendingRequest, headers=None, signature=None,
                  context=None) -> SignedPreparedRequest:
    """Build the signed wire request for ``pending``.

    :param headers: Extra headers sent with the request and, for AWS,
                    covered by the signature.

    :param signature: Optional :class:`~reqsign.authorization.MD5Signature`
                      or :class:`~reqsign.authorization.PlainSignature`.

    :param context: :class:`~reqsign.models.SigningContext` supplying the
                    clock and nonces.

    :raises BadURLError: if the URL cannot be encoded or parsed.

    :raises BadRequestAuthorizationError: if the credentials are unusable.

    :raises BadRequestParametersError: if the parameters cannot be
                                       serialized to JSON.
    """
    logger.debug(f'building request: {pending.describe()}')
    return SignedRequest.from_pending(pending, headers=headers, signature=signature,
                                      context=context).prepare()

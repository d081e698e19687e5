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
reqsign.models
~~~~~~~~~~~~~~

Plain values describing a request before it is signed.

:copyright: (C) 2024-2026 by reqsign contributors.
:license: AGPL 3, see LICENSE for more details.
"""
from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Callable, Mapping, Optional, Union

from reqsign.authorization import AuthorizationSpec
from reqsign.utils import redact_url

ParameterValue = Optional[Union[str, int, float, bool]]

DEFAULT_TIMEOUT = 60.0


class Method(str, Enum):
    GET = 'GET'
    POST = 'POST'
    PUT = 'PUT'
    PATCH = 'PATCH'
    DELETE = 'DELETE'

    @property
    def has_body(self) -> bool:
        """POST, PUT and PATCH carry parameters in a JSON body."""
        return self in (Method.POST, Method.PUT, Method.PATCH)

    @classmethod
    def _missing_(cls, value):
        if isinstance(value, str) and value.upper() != value:
            return cls(value.upper())
        return None


class CachePolicy(str, Enum):
    """Cache behaviour requested from the transport."""

    USE_PROTOCOL_CACHE_POLICY = 'use-protocol-cache-policy'
    RELOAD_IGNORING_LOCAL_CACHE = 'reload-ignoring-local-cache'
    RETURN_CACHE_DATA_ELSE_LOAD = 'return-cache-data-else-load'
    RETURN_CACHE_DATA_DONT_LOAD = 'return-cache-data-dont-load'


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _uuid_nonce() -> str:
    return str(uuid.uuid4())


@dataclass(frozen=True)
class SigningContext:
    """The impure inputs of the signers.

    :param clock: Callable returning the current time as an aware
                  :class:`datetime.datetime`.

    :param nonce: Callable returning a fresh, unique string per call.
    """

    clock: Callable[[], datetime] = _utcnow
    nonce: Callable[[], str] = _uuid_nonce

    def timestamp(self) -> int:
        """Seconds since the epoch according to :attr:`clock`."""
        return int(self.clock().timestamp())


@dataclass
class PendingRequest:
    """Everything needed to build a signed wire request.

    Usage::

        >>> from reqsign import PendingRequest, Method, BasicAuthorization
        >>> req = PendingRequest('https://example.com/api', Method.GET,
        ...                      authorization=BasicAuthorization('u', 'p'))

    A ``timeout`` of ``None`` takes the sending session's configured
    timeout, or :data:`DEFAULT_TIMEOUT` when built without a session.
    """

    base_url: str
    method: Method = Method.POST
    timeout: float | None = None
    authorization: AuthorizationSpec | None = None
    cache_policy: CachePolicy = CachePolicy.USE_PROTOCOL_CACHE_POLICY
    parameters: Mapping[str, ParameterValue] | None = field(default=None)

    def describe(self) -> str:
        """A log-safe one line description, credentials redacted."""
        auth = 'none'
        if self.authorization is not None:
            redacted = getattr(self.authorization, 'redacted', None)
            auth = redacted() if redacted else type(self.authorization).__name__
        params = sorted(self.parameters) if self.parameters else []
        return (f'{Method(self.method).value} {redact_url(self.base_url)} '
                f'timeout={self.timeout} auth={auth} params={params}')

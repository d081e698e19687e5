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
reqsign.session
~~~~~~~~~~~~~~~

This module provides a SigningSession object that loads settings, sets
up logging and turns :class:`~reqsign.models.PendingRequest` objects
into signed requests.

:copyright: (C) 2024-2026 by reqsign contributors.
:license: AGPL 3, see LICENSE for more details.
"""
from __future__ import annotations

import dataclasses
import logging
import platform
import sys
from typing import Mapping, MutableMapping

import requests.sessions
from requests import Response
from requests.utils import default_headers

from reqsign import __version__
from reqsign.config import get_config, get_timeout
from reqsign.exceptions import JSONFormatError
from reqsign.models import PendingRequest, SigningContext
from reqsign.request import SignedPreparedRequest, build_request
from reqsign.utils import redact_url

logger = logging.getLogger(__name__)


class SigningSession(requests.sessions.Session):
    """The :class:`SigningSession <reqsign.SigningSession>` object
    carries configuration and default headers, and builds and sends
    signed requests. It is subclassed from
    :class:`requests.Session <requests.Session>`.

    Usage::

        >>> from reqsign import SigningSession, PendingRequest, OAuth2Authorization
        >>> s = SigningSession()
        >>> pending = PendingRequest('https://example.com/me', 'GET',
        ...                          authorization=OAuth2Authorization('token'))
        >>> s.prepare_pending(pending).headers['Authorization']
        'Bearer token'
    """

    def __init__(self,
                 config: Mapping | None = None,
                 config_file: str = "",
                 debug: bool = False,
                 context: SigningContext | None = None):
        """Initialize :class:`SigningSession <SigningSession>` object with config.

        :param config: A config dict, merged over the config file.

        :param config_file: Path to an INI config file.

        :param debug: Also log ``urllib3`` records to the log file.

        :param context: Clock and nonce source handed to every signer.

        :returns: :class:`SigningSession` object.
        """
        super().__init__()
        self.config = get_config(config, config_file)
        self.config_file = config_file
        self.context = context or SigningContext()

        general = self.config.get('general', {})
        self.timeout: float = get_timeout(self.config)

        self.headers = default_headers()  # type: ignore[assignment]
        self.headers.update({'User-Agent': general.get('user_agent')
                             or self._get_user_agent_string()})

        logging_config = self.config.get('logging', {})
        if logging_config.get('level'):
            self.set_file_logger(logging_config.get('level', 'NOTSET'),
                                 logging_config.get('file', 'reqsign.log'))
            if debug or (logger.level <= 10):
                self.set_file_logger(logging_config.get('level', 'NOTSET'),
                                     logging_config.get('file', 'reqsign.log'),
                                     'urllib3')

    def _get_user_agent_string(self) -> str:
        """Generate a User-Agent string to be sent with every request."""
        uname = platform.uname()
        py_version = '{}.{}.{}'.format(*sys.version_info)
        return f'reqsign/{__version__} ({uname[0]} {uname[-1]}) Python/{py_version}'

    def set_file_logger(
        self,
        log_level: str,
        path: str,
        logger_name: str = 'reqsign'
    ) -> None:
        """Convenience function to quickly configure any level of
        logging to a file.

        :param log_level: A log level as specified in the `logging` module.

        :param path: Path to the log file. The file will be created if it doesn't already
                     exist.

        :param logger_name: The name of the logger.
        """
        _log_level = {
            'CRITICAL': 50,
            'ERROR': 40,
            'WARNING': 30,
            'INFO': 20,
            'DEBUG': 10,
            'NOTSET': 0,
        }

        log_format = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

        _log = logging.getLogger(logger_name)
        _log.setLevel(logging.DEBUG)

        fh = logging.FileHandler(path, encoding='utf-8')
        fh.setLevel(_log_level[log_level.upper()])

        formatter = logging.Formatter(log_format)
        fh.setFormatter(formatter)

        _log.addHandler(fh)

    def prepare_pending(self,
                        pending: PendingRequest,
                        headers: Mapping | None = None,
                        signature=None) -> SignedPreparedRequest:
        """Build the signed request for ``pending``.

        Session headers are sent with, and signed as part of, the request.
        A ``pending`` without a timeout gets the session's timeout.
        """
        if pending.timeout is None:
            pending = dataclasses.replace(pending, timeout=self.timeout)
        merged = dict(self.headers)
        merged.update(headers or {})
        return build_request(pending, headers=merged, signature=signature,
                             context=self.context)

    def send_pending(self,
                     pending: PendingRequest,
                     headers: Mapping | None = None,
                     signature=None,
                     request_kwargs: MutableMapping | None = None) -> Response:
        """Sign ``pending`` and send it.

        :param request_kwargs: Keyword arguments passed on to
                               :meth:`requests.Session.send`.
        """
        request_kwargs = request_kwargs or {}
        prepared = self.prepare_pending(pending, headers=headers, signature=signature)
        if 'timeout' not in request_kwargs:
            request_kwargs['timeout'] = prepared.timeout
        settings = self.merge_environment_settings(prepared.url, {}, None, None, None)
        for k, v in settings.items():
            request_kwargs.setdefault(k, v)
        logger.info(f'sending {prepared.method} {redact_url(prepared.url)}')
        return self.send(prepared, **request_kwargs)

    def get_json(self,
                 pending: PendingRequest,
                 headers: Mapping | None = None,
                 signature=None,
                 request_kwargs: MutableMapping | None = None):
        """Send ``pending`` and decode the response body as JSON.

        :raises requests.HTTPError: for a 4xx or 5xx response.

        :raises JSONFormatError: if the body is not valid JSON.
        """
        r = self.send_pending(pending, headers=headers, signature=signature,
                              request_kwargs=request_kwargs)
        r.raise_for_status()
        try:
            return r.json()
        except ValueError as exc:
            logger.error(f'invalid JSON in response from {redact_url(r.url)}')
            raise JSONFormatError(
                f'Response from {redact_url(r.url)} is not valid JSON: {exc}'
            ) from exc

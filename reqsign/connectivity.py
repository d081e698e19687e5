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
reqsign.connectivity
~~~~~~~~~~~~~~~~~~~~

A registry of connectivity-change observers.

Registration, removal and notification are all funneled through one
single-worker executor, so observers are only ever touched from that
worker thread. Detecting connectivity changes is left to the caller.

:copyright: (C) 2024-2026 by reqsign contributors.
:license: AGPL 3, see LICENSE for more details.
"""
from __future__ import annotations

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from enum import Enum
from typing import Callable

logger = logging.getLogger(__name__)


class ConnectionState(str, Enum):
    AVAILABLE = 'available'
    UNAVAILABLE = 'unavailable'
    NO_CONNECTION = 'no_connection'


Handler = Callable[[ConnectionState], None]


class ConnectivityRegistry:
    """Observers notified of connection state changes.

    Usage::

        >>> registry = ConnectivityRegistry()
        >>> registry.add_observer(print).result()
        >>> registry.notify(ConnectionState.AVAILABLE).result()
        ConnectionState.AVAILABLE
        1
        >>> registry.close()
    """

    def __init__(self) -> None:
        self._handlers: list[Handler] = []
        self._executor = ThreadPoolExecutor(max_workers=1,
                                            thread_name_prefix='reqsign-connectivity')

    def add_observer(self, handler: Handler) -> Future:
        return self._executor.submit(self._handlers.append, handler)

    def remove_observer(self, handler: Handler) -> Future:
        return self._executor.submit(self._remove, handler)

    def notify(self, state: ConnectionState) -> Future:
        """Call every observer with ``state`` on the registry's worker.

        The returned future resolves to the number of observers called.
        """
        return self._executor.submit(self._dispatch, ConnectionState(state))

    @property
    def observer_count(self) -> int:
        return self._executor.submit(len, self._handlers).result()

    def close(self) -> None:
        self._executor.shutdown(wait=True)

    def __enter__(self) -> ConnectivityRegistry:
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def _remove(self, handler: Handler) -> None:
        if handler in self._handlers:
            self._handlers.remove(handler)

    def _dispatch(self, state: ConnectionState) -> int:
        called = 0
        for handler in list(self._handlers):
            try:
                handler(state)
            except Exception:
                logger.exception(f'connectivity observer {handler!r} failed on {state.value}')
            called += 1
        return called

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
reqsign.exceptions
~~~~~~~~~~~~~~~~~~

:copyright: (C) 2024-2026 by reqsign contributors.
:license: AGPL 3, see LICENSE for more details.
"""


class RequestBuildError(Exception):
    """A request could not be constructed."""


class BadURLError(RequestBuildError):
    def __init__(self, *args, **kwargs):
        default_message = "This does not seem to be a valid URL."
        if args or kwargs:
            super().__init__(*args, **kwargs)
        else:
            super().__init__(default_message)


class BadRequestAuthorizationError(RequestBuildError):
    def __init__(self, *args, **kwargs):
        default_message = "There is a problem with the request authorization header."
        if args or kwargs:
            super().__init__(*args, **kwargs)
        else:
            super().__init__(default_message)


class UnsupportedAuthorizationError(BadRequestAuthorizationError):
    """The authorization value is not a known scheme."""


class BadRequestParametersError(RequestBuildError):
    def __init__(self, parameters=None, message=None):
        self.parameters = parameters
        if message is None:
            message = f"This parameter set is invalid, check it again: {parameters!r}"
        super().__init__(message)


class JSONFormatError(Exception):
    def __init__(self, *args, **kwargs):
        default_message = "Failed to decode the response body as JSON."
        if args or kwargs:
            super().__init__(*args, **kwargs)
        else:
            super().__init__(default_message)

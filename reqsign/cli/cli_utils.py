"""
reqsign.cli.cli_utils

"""

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

from __future__ import annotations

import argparse
import json
import sys


def coerce_value(value: str):
    """Turn a command line value into a parameter scalar.

    ``42``, ``3.14``, ``true``, ``false`` and ``null`` become their JSON
    types, anything else stays a string.
    """
    try:
        parsed = json.loads(value)
    except ValueError:
        return value
    if isinstance(parsed, (str, int, float, bool)) or parsed is None:
        return parsed
    return value


def split_key_value(pair: str) -> tuple[str, str | None]:
    """Split ``pair`` on the first ``:`` or ``=``, whichever comes first.

    The value is ``None`` when there is no separator.
    """
    positions = [i for i in (pair.find(":"), pair.find("=")) if i != -1]
    if not positions:
        return pair, None
    i = min(positions)
    return pair[:i], pair[i + 1:]


class KeyValueAction(argparse.Action):
    """Collect repeated ``KEY:VALUE`` (or ``KEY=VALUE``) options into a dict."""

    def __init__(self, option_strings, dest, coerce=False, **kwargs):
        self.coerce = coerce
        super().__init__(option_strings, dest, **kwargs)

    def __call__(self, parser, namespace, values, option_string=None):
        if getattr(namespace, self.dest, None) is None:
            setattr(namespace, self.dest, {})

        for pair in values:
            key, value = split_key_value(pair)
            if value is None:
                parser.error(f"{option_string} must be formatted as 'KEY:VALUE'")
            if not key:
                parser.error(f"{option_string} needs a non-empty KEY")

            current_dict = getattr(namespace, self.dest)
            current_dict[key] = coerce_value(value) if self.coerce else value


def exit_on_signal(sig, frame):
    """
    Exit the program cleanly upon receiving a specified signal.

    The exit code is 128 plus the signal number.
    """
    exit_code = 128 + sig
    sys.exit(exit_code)

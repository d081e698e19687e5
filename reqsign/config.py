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
reqsign.config
~~~~~~~~~~~~~~

Settings read from an INI file. Credentials are never read from or
written to the configuration file.

:copyright: (C) 2024-2026 by reqsign contributors.
:license: AGPL 3, see LICENSE for more details.
"""
from __future__ import annotations

import os
from collections import defaultdict
from configparser import RawConfigParser
from typing import Mapping

from reqsign.models import DEFAULT_TIMEOUT
from reqsign.utils import deep_update


def parse_config_file(config_file=None):
    config = RawConfigParser()

    if not config_file:
        candidates = []
        if os.environ.get('REQSIGN_CONFIG_FILE'):
            candidates.append(os.environ['REQSIGN_CONFIG_FILE'])
        xdg_config_home = os.environ.get('XDG_CONFIG_HOME')
        if not xdg_config_home or not os.path.isabs(xdg_config_home):
            xdg_config_home = os.path.join(os.path.expanduser('~'), '.config')
        xdg_config_file = os.path.join(xdg_config_home, 'reqsign', 'reqsign.ini')
        candidates.append(xdg_config_file)
        candidates.append(os.path.join(os.path.expanduser('~'), '.config', 'reqsign.ini'))
        candidates.append(os.path.join(os.path.expanduser('~'), '.reqsign'))
        for candidate in candidates:
            if os.path.isfile(candidate):
                config_file = candidate
                break
        else:
            config_file = os.environ.get('REQSIGN_CONFIG_FILE', xdg_config_file)
    config.read(config_file)

    if not config.has_section('general'):
        config.add_section('general')
    if not config.has_section('logging'):
        config.add_section('logging')

    return (config_file, config)


def get_config(config: Mapping | None = None, config_file=None) -> dict:
    """Merge the configuration file with ``config``.

    Values in ``config`` win over values read from the file.
    """
    _config = config or {}
    config_file, parsed = parse_config_file(config_file)

    if not os.path.isfile(config_file):
        return deep_update({}, _config)

    config_dict: dict = defaultdict(dict)
    for sec in parsed.sections():
        for k, v in parsed.items(sec):
            if k is None or v is None:
                continue
            config_dict[sec][k] = v

    # Recursive/deep update.
    deep_update(config_dict, _config)

    return {k: v for k, v in config_dict.items() if v}


def get_timeout(config: Mapping) -> float:
    timeout = config.get('general', {}).get('timeout')
    if timeout is None:
        return DEFAULT_TIMEOUT
    return float(timeout)

#!/usr/bin/env python
"""
rs.py

The reqsign command line interface.
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

import argparse
import signal
import sys

from reqsign import SigningSession, __version__
from reqsign.cli import rs_sign
from reqsign.cli.cli_utils import exit_on_signal

# Handle broken pipe
try:
    signal.signal(signal.SIGPIPE, signal.SIG_DFL)
except AttributeError:
    # Non-unix support
    pass

# Handle <Ctrl-C>
signal.signal(signal.SIGINT, exit_on_signal)


def validate_config_path(path):
    """
    Validate the path to the configuration file.

    Returns:
        str: Validated path to the configuration file.
    """
    file_check = argparse.FileType("r")
    file_check(path).close()
    return path


def main(argv=None):
    """
    Main entry point for the CLI.
    """
    parser = argparse.ArgumentParser(
            description="Build and inspect signed HTTP requests.",
            epilog="See 'reqsign {command} --help' for help on a specific command.",
            formatter_class=argparse.RawTextHelpFormatter)

    parser.add_argument("-v", "--version",
                        action="version",
                        version=__version__)
    parser.add_argument("-c", "--config-file",
                        action="store",
                        type=validate_config_path,
                        metavar="FILE",
                        help="path to configuration file")
    parser.add_argument("-l", "--log",
                        action="store_true",
                        default=False,
                        help="enable logging")
    parser.add_argument("-d", "--debug",
                        action="store_true",
                        help="enable debugging")

    subparsers = parser.add_subparsers(title="commands",
                                       dest="command",
                                       metavar="{command}")

    # Add subcommand parsers
    rs_sign.setup(subparsers)

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help(sys.stderr)
        sys.exit(1)

    config: dict[str, dict] = {}
    if args.log:
        config["logging"] = {"level": "INFO"}
    elif args.debug:
        config["logging"] = {"level": "DEBUG"}

    args.session = SigningSession(config_file=args.config_file,
                                  config=config,
                                  debug=args.debug)

    args.func(args)


if __name__ == "__main__":
    main()

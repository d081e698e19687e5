"""
rs_sign.py

'reqsign' subcommand for building a signed request and printing it.
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

from reqsign import (
    APIKeyAuthorization,
    AWSSignatureV4Authorization,
    BasicAuthorization,
    BearerToken,
    DigestAuthorization,
    HawkAlgorithm,
    HawkAuthorization,
    MD5Signature,
    Method,
    OAuth1Authorization,
    OAuth1SignatureMethod,
    OAuth2Authorization,
    PendingRequest,
    PlainSignature,
)
from reqsign.cli.cli_utils import KeyValueAction
from reqsign.exceptions import RequestBuildError

AUTH_SCHEMES = ["none", "basic", "digest", "bearer", "api-key",
                "oauth1", "oauth2", "hawk", "aws4"]


def setup(subparsers):
    """
    Setup args for sign command.

    Args:
        subparsers: subparser object passed from rs.py
    """
    parser = subparsers.add_parser("sign",
                                   aliases=["si"],
                                   help="build a signed request and print it as JSON")

    parser.add_argument("url",
                        help="the request URL")
    parser.add_argument("--method", "-m",
                        type=str.upper,
                        choices=[m.value for m in Method],
                        default=Method.GET.value,
                        help="HTTP method (default: GET)")
    parser.add_argument("--param", "-p",
                        nargs=1,
                        action=KeyValueAction,
                        coerce=True,
                        metavar="KEY:VALUE",
                        help=("request parameter, sent in the query string for GET "
                              "and DELETE and as a JSON body otherwise. "
                              "Numbers, true, false and null are typed. "
                              "Can be specified multiple times."))
    parser.add_argument("--header", "-H",
                        nargs=1,
                        action=KeyValueAction,
                        metavar="KEY:VALUE",
                        help="extra request header. Can be specified multiple times.")
    parser.add_argument("--timeout", "-t",
                        type=float,
                        help="request timeout in seconds")
    parser.add_argument("--auth", "-a",
                        choices=AUTH_SCHEMES,
                        default="none",
                        help="authorization scheme (default: none)")

    signature_group = parser.add_mutually_exclusive_group()
    signature_group.add_argument("--md5-signature",
                                 metavar="SECRET",
                                 help="append signature=<md5 of SECRET> to the URL")
    signature_group.add_argument("--plain-signature",
                                 metavar="KEYWORD",
                                 help="send KEYWORD in a Signature header")

    creds = parser.add_argument_group("credentials")
    creds.add_argument("--username", help="basic and digest username")
    creds.add_argument("--password", help="basic and digest password")
    creds.add_argument("--realm", help="digest realm")
    creds.add_argument("--nonce", help="digest server nonce")
    creds.add_argument("--uri", help="digest uri (default: the URL path)")
    creds.add_argument("--qop", help="digest qop")
    creds.add_argument("--nc", help="digest nonce count")
    creds.add_argument("--cnonce", help="digest client nonce")
    creds.add_argument("--token", help="bearer, oauth2 or oauth1 token")
    creds.add_argument("--token-type", default="Bearer",
                       help="oauth2 token type (default: Bearer)")
    creds.add_argument("--token-secret", help="oauth1 token secret")
    creds.add_argument("--consumer-key", help="oauth1 consumer key")
    creds.add_argument("--consumer-secret", help="oauth1 consumer secret")
    creds.add_argument("--signature-method",
                       choices=[m.value for m in OAuth1SignatureMethod],
                       help="oauth1 signature method (default: HMAC-SHA1)")
    creds.add_argument("--key-name", help="api key name")
    creds.add_argument("--key-value", help="api key value")
    creds.add_argument("--hawk-id", help="hawk key identifier")
    creds.add_argument("--hawk-key", help="hawk key")
    creds.add_argument("--algorithm",
                       choices=[a.value for a in HawkAlgorithm],
                       help="hawk MAC algorithm (default: sha256)")
    creds.add_argument("--access-key", help="aws access key id")
    creds.add_argument("--secret-key", help="aws secret access key")
    creds.add_argument("--region", help="aws region")
    creds.add_argument("--service", help="aws service name")
    creds.add_argument("--session-token", help="aws session token")

    parser.set_defaults(func=main)


def _require(args: argparse.Namespace, *names: str) -> None:
    missing = [n for n in names if getattr(args, n) is None]
    if missing:
        flags = ", ".join("--" + n.replace("_", "-") for n in missing)
        print(f"error: --auth {args.auth} requires {flags}", file=sys.stderr)
        sys.exit(1)


def get_authorization(args: argparse.Namespace):
    """
    Build the authorization value selected with ``--auth``.
    """
    config = args.session.config
    if args.auth == "basic":
        _require(args, "username", "password")
        return BasicAuthorization(args.username, args.password)
    if args.auth == "digest":
        _require(args, "username", "password", "realm", "nonce")
        uri = args.uri
        if uri is None:
            uri = "/" + args.url.split("://", 1)[-1].partition("/")[2]
        return DigestAuthorization(args.username, args.password, args.realm, args.nonce,
                                   uri, qop=args.qop, nc=args.nc, cnonce=args.cnonce)
    if args.auth == "bearer":
        return BearerToken(args.token)
    if args.auth == "api-key":
        _require(args, "key_name", "key_value")
        return APIKeyAuthorization(args.key_name, args.key_value)
    if args.auth == "oauth1":
        _require(args, "consumer_key", "consumer_secret")
        method = (args.signature_method
                  or config.get("oauth1", {}).get("signature_method")
                  or OAuth1SignatureMethod.HMAC_SHA1.value)
        return OAuth1Authorization(args.consumer_key, args.consumer_secret,
                                   token=args.token, token_secret=args.token_secret,
                                   signature_method=OAuth1SignatureMethod(method))
    if args.auth == "oauth2":
        return OAuth2Authorization(args.token, args.token_type)
    if args.auth == "hawk":
        _require(args, "hawk_id", "hawk_key")
        algorithm = (args.algorithm
                     or config.get("hawk", {}).get("algorithm")
                     or HawkAlgorithm.SHA256.value)
        return HawkAuthorization(args.hawk_id, args.hawk_key, HawkAlgorithm(algorithm))
    if args.auth == "aws4":
        _require(args, "access_key", "secret_key", "region", "service")
        return AWSSignatureV4Authorization(args.access_key, args.secret_key,
                                           args.region, args.service,
                                           session_token=args.session_token)
    return None


def get_signature(args: argparse.Namespace):
    if args.md5_signature is not None:
        return MD5Signature(args.md5_signature)
    if args.plain_signature is not None:
        return PlainSignature(args.plain_signature)
    return None


def main(args: argparse.Namespace) -> None:
    """
    Main entrypoint for 'reqsign sign'.
    """
    try:
        pending = PendingRequest(
            args.url,
            Method(args.method),
            timeout=args.timeout,
            authorization=get_authorization(args),
            parameters=args.param,
        )
        prepared = args.session.prepare_pending(pending,
                                                headers=args.header,
                                                signature=get_signature(args))
    except (RequestBuildError, ValueError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        sys.exit(1)

    body = prepared.body
    if isinstance(body, bytes):
        body = body.decode("utf-8")
    print(json.dumps({
        "method": prepared.method,
        "url": prepared.url,
        "headers": dict(prepared.headers),
        "body": body,
    }, indent=2))

# Copyright 2026 CredHub Client Contributors
# SPDX-License-Identifier: Apache-2.0
"""Command-line interface: ``credhub api|login|logout|get|delete``."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from getpass import getpass

import httpx

import credhub_client
from .errors import CredhubError

logger = logging.getLogger(__name__)

SKIP_TLS_WARNING = (
    "Warning: The targeted TLS certificate has not been verified for this connection."
)
PARAMETERS_NOT_ALLOWED = (
    "The combination of parameters in the request is not allowed. "
    "Please validate your input and retry your request."
)


class _Parser(argparse.ArgumentParser):
    def error(self, message: str) -> None:  # type: ignore[override]
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def cmd_api(args: argparse.Namespace) -> None:
    server = args.server or args.server_pos
    if not server:
        session = credhub_client.load_session()
        if not session.api_url:
            raise credhub_client.ConfigurationError()
        print(session.api_url)
        return
    credhub_client.target(server, skip_tls=args.skip_tls_validation)
    if args.skip_tls_validation:
        print(SKIP_TLS_WARNING)
    print(f"Setting the target url: {server}")


def cmd_login(args: argparse.Namespace) -> None:
    if args.password and not args.username:
        raise CredhubError(PARAMETERS_NOT_ALLOWED)
    username = args.username or input("username: ")
    password = args.password or getpass("password: ")
    credhub_client.login(
        username,
        password,
        server=args.server,
        skip_tls=args.skip_tls_validation,
    )
    # the flag only applies to a target set with -s
    if args.server and args.skip_tls_validation:
        print(SKIP_TLS_WARNING)
    print("Login Successful")


def cmd_logout(args: argparse.Namespace) -> None:
    credhub_client.logout()
    print("Logout Successful")


def cmd_get(args: argparse.Namespace) -> None:
    name = args.name or args.name_pos
    if not name:
        raise CredhubError("A credential name is required.")
    cred = credhub_client.get(name)
    print(cred.json() if args.output_json else cred.terminal())


def cmd_delete(args: argparse.Namespace) -> None:
    credhub_client.delete(args.name)
    print("Secret successfully deleted")


def build_parser() -> argparse.ArgumentParser:
    parser = _Parser(prog="credhub", description="CredHub command line client")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log HTTP requests to stderr")
    parser.add_argument("--version", action="version", version=credhub_client.__version__)
    sub = parser.add_subparsers(dest="command", required=True, parser_class=_Parser)

    # api
    s = sub.add_parser("api", aliases=["a"], help="Get or set the CredHub API target")
    s.add_argument("server_pos", nargs="?", metavar="SERVER")
    s.add_argument("-s", "--server", help="URI of the API server to target")
    s.add_argument("--skip-tls-validation", action="store_true", help="Skip TLS certificate verification")
    s.set_defaults(func=cmd_api)

    # login
    s = sub.add_parser("login", aliases=["l"], help="Authenticate user with CredHub")
    s.add_argument("-u", "--username", help="Authentication username")
    s.add_argument("-p", "--password", help="Authentication password")
    s.add_argument("-s", "--server", help="URI of the API server to target")
    s.add_argument("--skip-tls-validation", action="store_true", help="Skip TLS certificate verification")
    s.set_defaults(func=cmd_login)

    # logout
    s = sub.add_parser("logout", aliases=["o"], help="Discard authenticated user session")
    s.set_defaults(func=cmd_logout)

    # get
    s = sub.add_parser("get", aliases=["g"], help="Get a credential value")
    s.add_argument("name_pos", nargs="?", metavar="NAME")
    s.add_argument("-n", "--name", help="Name of the credential to retrieve")
    s.add_argument("-j", "--output-json", action="store_true", help="Return response in JSON format")
    s.set_defaults(func=cmd_get)

    # delete
    s = sub.add_parser("delete", aliases=["d"], help="Delete a credential")
    s.add_argument("-n", "--name", required=True, help="Name of the credential to delete")
    s.set_defaults(func=cmd_delete)

    return parser


def configure_logging(verbose: bool) -> None:
    debug = verbose or os.getenv("CREDHUB_DEBUG") == "1"
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    if not debug:
        logging.getLogger("httpx").setLevel(logging.WARNING)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)
    try:
        args.func(args)
    except (CredhubError, httpx.HTTPError, httpx.InvalidURL) as e:
        logger.debug("Command %s failed", args.command, exc_info=True)
        print(str(e) or type(e).__name__, file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\nAborted by user.", file=sys.stderr)
        return 1
    return 0

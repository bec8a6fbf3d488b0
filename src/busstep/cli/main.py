# Copyright 2026 busstep Contributors
# SPDX-License-Identifier: Apache-2.0

"""Entry point for the busstep command-line interface."""

import argparse
import logging
import sys

from busstep.introspection.loader import load_documents
from busstep.introspection.parser import IntrospectionError
from busstep.model.entities import InterfaceDocument
from busstep.resolution.locator import ResolutionError, SignatureRole, resolve_signature
from busstep.signature.equivalence import signatures_are_eq
from busstep.workspace.config import ConfigError, load_config

# ###############
# Public Interface
# ###############


def main() -> None:
    """Run the busstep CLI."""
    parser = argparse.ArgumentParser(
        prog="busstep",
        description="busstep - keep types in lockstep with D-Bus introspection XML",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log lookup details to stderr",
    )
    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    # signature subcommand
    signature_parser = subparsers.add_parser(
        "signature",
        help="Print the declared signature of a member",
        description="Look up a member in the introspection XML and print its signature.",
    )
    signature_parser.add_argument(
        "role",
        choices=[role.value for role in SignatureRole],
        help="Which signature to print",
    )
    signature_parser.add_argument("member", help="Member name, e.g. RequestName")
    signature_parser.add_argument(
        "--interface",
        default=None,
        help="Interface declaring the member (required when several interfaces declare it)",
    )
    _add_xml_path_argument(signature_parser)

    # compare subcommand
    compare_parser = subparsers.add_parser(
        "compare",
        help="Compare two signatures",
        description="Exit with 0 if the signatures are at most one pair of outer parentheses apart.",
    )
    compare_parser.add_argument("lhs", help="First signature")
    compare_parser.add_argument("rhs", help="Second signature")

    # members subcommand
    members_parser = subparsers.add_parser(
        "members",
        help="List the interfaces and members of the introspection XML",
        description="List every interface with its methods, signals and properties.",
    )
    _add_xml_path_argument(members_parser)

    args = parser.parse_args()
    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    sys.exit(_dispatch(args))


# ################
# Implementation
# ################


def _add_xml_path_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--xml-path",
        default=None,
        help="Directory with the introspection XML (default: .busstep.yaml, ./xml or ./XML)",
    )


def _dispatch(args: argparse.Namespace) -> int:
    """Dispatch to the appropriate subcommand handler."""
    if args.command == "signature":
        return _cmd_signature(args)
    if args.command == "compare":
        return _cmd_compare(args)
    if args.command == "members":
        return _cmd_members(args)
    return 0


def _load(args: argparse.Namespace) -> list[InterfaceDocument] | None:
    """Load the documents selected by *args*, printing an error and returning None on failure."""
    try:
        config = load_config(args.xml_path)
        return load_documents(config.xml_path, config.file_pattern)
    except (ConfigError, IntrospectionError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return None


def _cmd_signature(args: argparse.Namespace) -> int:
    """Handle the signature subcommand."""
    documents = _load(args)
    if documents is None:
        return 1

    try:
        signature = resolve_signature(documents, SignatureRole(args.role), args.member, args.interface)
    except ResolutionError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    print(signature)
    return 0


def _cmd_compare(args: argparse.Namespace) -> int:
    """Handle the compare subcommand."""
    if signatures_are_eq(args.lhs, args.rhs):
        print(f"Signatures are equal (Lhs: {args.lhs}, Rhs: {args.rhs})")
        return 0
    print(f"Signatures are not equal (Lhs: {args.lhs}, Rhs: {args.rhs})", file=sys.stderr)
    return 1


def _cmd_members(args: argparse.Namespace) -> int:
    """Handle the members subcommand."""
    documents = _load(args)
    if documents is None:
        return 1

    if not documents:
        print("No introspection documents found.")
        return 0

    for document in documents:
        print(document.source)
        for interface in document.interfaces:
            print(f"  {interface.name}")
            for method in interface.methods:
                ins = "".join(arg.signature for arg in method.in_args)
                outs = "".join(arg.signature for arg in method.out_args)
                print(f"    method   {method.name}({ins}) -> ({outs})")
            for signal in interface.signals:
                body = "".join(arg.signature for arg in signal.args)
                print(f"    signal   {signal.name}({body})")
            for prop in interface.properties:
                print(f"    property {prop.name}: {prop.signature} [{prop.access}]")
    return 0

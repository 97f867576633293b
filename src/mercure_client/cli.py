"""mercure-client operator CLI.

Provides ``mercure-client`` console script and ``python -m mercure_client`` entry point.
Configuration comes from ``MERCURE_*`` environment variables (see :class:`Settings`)
and can be overridden per invocation with ``--hub`` / ``--secret``.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from datetime import timedelta
from typing import Any

import httpx
from pydantic import SecretStr

from mercure_client.client import Client, PublishUpdatePrivacy
from mercure_client.config import Settings
from mercure_client.errors import (
    HubRejected,
    MercureError,
    TransportError,
    Unauthorized,
)
from mercure_client.topic import Topic
from mercure_client.topic_selector import TopicSelector
from mercure_client.version import __version__

# ---------------------------------------------------------------------------
# Exit codes
# ---------------------------------------------------------------------------
EXIT_OK = 0
EXIT_BAD_ARGS = 2
EXIT_UNAUTHORIZED = 3
EXIT_HUB_REJECTED = 4
EXIT_TRANSPORT = 5


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _output(data: Any, *, pretty: bool = False) -> None:
    indent = 2 if pretty else None
    print(json.dumps(data, default=str, indent=indent))


def _err(msg: str) -> None:
    print(msg, file=sys.stderr)


def _settings(args: argparse.Namespace) -> Settings:
    overrides: dict[str, Any] = {}
    if getattr(args, "hub", None):
        overrides["hub_url"] = args.hub
    if getattr(args, "secret", None):
        overrides["publisher_jwt_secret"] = SecretStr(args.secret)
        overrides["subscriber_jwt_secret"] = SecretStr(args.secret)
    return Settings(**overrides)


def _parse_vars(raw: list[str] | None) -> list[tuple[str, str]] | None:
    """Parse ``NAME=VALUE`` pairs, keeping their order. ``None`` on bad input."""
    pairs: list[tuple[str, str]] = []
    for item in raw or []:
        name, sep, value = item.partition("=")
        if not sep or not name:
            _err(f"invalid --var {item!r}, expected NAME=VALUE")
            return None
        pairs.append((name, value))
    return pairs


def _selectors(raw: list[str] | None) -> list[TopicSelector]:
    return [TopicSelector.parse(s) for s in (raw or ["*"])]


# ---------------------------------------------------------------------------
# publish
# ---------------------------------------------------------------------------


async def _publish(
    args: argparse.Namespace, settings: Settings, variables: list[tuple[str, str]]
) -> str:
    topic = Topic(args.topic, variables, alternates=args.alternate or ())
    privacy = PublishUpdatePrivacy.PRIVATE if args.private else PublishUpdatePrivacy.PUBLIC
    async with httpx.AsyncClient(timeout=settings.http_timeout_seconds) as http_client:
        client = Client(
            http_client,
            settings.effective_hub_url(),
            settings.effective_publisher_jwt(),
        )
        return await client.publish_update(
            topic,
            args.data,
            privacy,
            update_id=args.id,
            event_type=args.type,
            retry=args.retry,
        )


def _cmd_publish(args: argparse.Namespace) -> int:
    variables = _parse_vars(args.var)
    if variables is None:
        return EXIT_BAD_ARGS

    try:
        settings = _settings(args)
        update_id = asyncio.run(_publish(args, settings, variables))
    except Unauthorized as err:
        _err(f"unauthorized: {err.detail}")
        return EXIT_UNAUTHORIZED
    except HubRejected as err:
        _err(err.detail)
        return EXIT_HUB_REJECTED
    except TransportError as err:
        _err(err.detail)
        return EXIT_TRANSPORT
    except (MercureError, RuntimeError) as err:
        _err(str(err))
        return EXIT_BAD_ARGS

    _output({"update_id": update_id}, pretty=args.pretty)
    return EXIT_OK


# ---------------------------------------------------------------------------
# token
# ---------------------------------------------------------------------------


def _cmd_token_publisher(args: argparse.Namespace) -> int:
    try:
        settings = _settings(args)
        if args.selector:
            settings = settings.model_copy(update={"publish_selectors": args.selector})
        token = settings.effective_publisher_jwt().to_compact_token()
    except (MercureError, RuntimeError) as err:
        _err(str(err))
        return EXIT_BAD_ARGS
    _output({"token": token}, pretty=args.pretty)
    return EXIT_OK


def _cmd_token_subscriber(args: argparse.Namespace) -> int:
    payload = None
    if args.payload is not None:
        try:
            payload = json.loads(args.payload)
        except json.JSONDecodeError as err:
            _err(f"--payload is not valid JSON: {err}")
            return EXIT_BAD_ARGS

    max_age = None if args.max_age is None else timedelta(seconds=args.max_age)
    try:
        settings = _settings(args)
        jwt = settings.subscriber_jwt(_selectors(args.selector), payload=payload, max_age=max_age)
        token = jwt.to_compact_token()
    except (MercureError, RuntimeError) as err:
        _err(str(err))
        return EXIT_BAD_ARGS
    _output({"token": token}, pretty=args.pretty)
    return EXIT_OK


# ---------------------------------------------------------------------------
# Argument parser construction
# ---------------------------------------------------------------------------


def _build_parser() -> argparse.ArgumentParser:
    # Common flags shared by all leaf subcommands
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--secret", default=None, help="JWT secret override")
    common.add_argument("--pretty", action="store_true", default=False, help="Pretty-print output")
    common.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")

    parser = argparse.ArgumentParser(
        prog="mercure-client",
        description="Mercure hub publisher CLI",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command")

    # ---- publish ----
    publish = subparsers.add_parser("publish", parents=[common], help="Publish an update")
    publish.add_argument("--hub", default=None, help="Hub URL override")
    publish.add_argument("--topic", required=True, help="Topic IRI or URI Template")
    publish.add_argument(
        "--alternate", action="append", default=None, help="Alternate topic IRI (repeatable)"
    )
    publish.add_argument(
        "--var", action="append", default=None, help="Template variable NAME=VALUE (repeatable)"
    )
    publish.add_argument("--data", default=None, help="Update payload")
    publish.add_argument("--private", action="store_true", help="Mark the update private")
    publish.add_argument("--id", default=None, help="Update ID")
    publish.add_argument("--type", default=None, help="SSE event type")
    publish.add_argument("--retry", type=int, default=None, help="SSE reconnection time (ms)")

    # ---- token ----
    token_parser = subparsers.add_parser("token", help="Issue JWTs")
    token_sub = token_parser.add_subparsers(dest="token_command")

    # token publisher
    tok_pub = token_sub.add_parser("publisher", parents=[common], help="Issue a publisher JWT")
    tok_pub.add_argument(
        "--selector", action="append", default=None, help="Topic selector (repeatable)"
    )

    # token subscriber
    tok_sub = token_sub.add_parser("subscriber", parents=[common], help="Issue a subscriber JWT")
    tok_sub.add_argument(
        "--selector", action="append", default=None, help="Topic selector (repeatable)"
    )
    tok_sub.add_argument("--max-age", type=int, default=None, help="Lifetime in seconds")
    tok_sub.add_argument("--payload", default=None, help="Subscriber payload as JSON")

    return parser


# ---------------------------------------------------------------------------
# Command dispatch
# ---------------------------------------------------------------------------


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns an integer exit code."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return EXIT_BAD_ARGS

    if getattr(args, "verbose", False):
        logging.basicConfig(level=logging.DEBUG)

    if args.command == "publish":
        return _cmd_publish(args)

    if args.command == "token":
        token_cmd = getattr(args, "token_command", None)
        if token_cmd == "publisher":
            return _cmd_token_publisher(args)
        if token_cmd == "subscriber":
            return _cmd_token_subscriber(args)
        parser.parse_args(["token", "--help"])
        return EXIT_BAD_ARGS

    parser.print_help()
    return EXIT_BAD_ARGS

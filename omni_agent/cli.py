"""CLI for the omni agent: omni-agent serve, omni-agent run, omni-agent actions."""

import argparse
import logging
import os
import sys

import uvicorn
from pydantic import ValidationError

from omni_agent.config import load_config
from omni_agent.cpi import (
    COMMAND_TYPES,
    CpiEngine,
    CpiError,
    command_from_tag,
    default_cpi_path,
    load_cpi_config,
)


def _split_pairs(pairs: list[str], option: str) -> dict[str, str]:
    """Turn ``["KEY=value", ...]`` into a dict."""
    parsed = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise ValueError(f"{option} expects KEY=VALUE, got '{pair}'")
        parsed[key] = value
    return parsed


def cmd_serve(args: argparse.Namespace) -> int:
    """Run the HTTP API with uvicorn."""
    if args.config:
        # The app reloads its configuration on startup
        os.environ["CONFIG_FILE"] = args.config
    try:
        config = load_config(args.config)
    except (FileNotFoundError, ValidationError) as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return 1

    host = args.host or config.host
    port = args.port or config.port
    print(f"Container Management API running at http://{host}:{port}")
    uvicorn.run("omni_agent.api:app", host=host, port=port, log_level=config.log_level.lower())
    return 0


def cmd_run(args: argparse.Namespace) -> int:
    """Execute one CPI action and print its output."""
    try:
        params = _split_pairs(args.param, "--param")
        if args.port:
            params["ports"] = args.port
        if args.env:
            params["env"] = _split_pairs(args.env, "--env")
        command = command_from_tag(args.tag, **params)
    except (ValueError, ValidationError) as e:
        print(f"Invalid parameters for '{args.tag}': {e}", file=sys.stderr)
        return 2

    engine = CpiEngine(args.cpi or default_cpi_path())
    try:
        result = engine.execute(command)
    except CpiError as e:
        print(f"{type(e).__name__}: {e}", file=sys.stderr)
        return 1

    sys.stdout.write(result.output)
    return 0


def cmd_actions(args: argparse.Namespace) -> int:
    """List the actions defined in a CPI file."""
    path = args.cpi or default_cpi_path()
    try:
        config = load_cpi_config(path)
    except CpiError as e:
        print(f"{type(e).__name__}: {e}", file=sys.stderr)
        return 1

    for tag, action in config.actions.items():
        suffix = f" (+{len(action.post_exec)} post-exec)" if action.post_exec else ""
        print(f"{tag}: {action.command}{suffix}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="omni-agent",
        description="Omni agent: manage Docker containers through CPI command files.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", help="Commands")

    serve_parser = sub.add_parser("serve", help="Start the HTTP API")
    serve_parser.add_argument(
        "-c",
        "--config",
        metavar="PATH",
        help="Config file path (default: CONFIG_FILE or ./config.yml)",
    )
    serve_parser.add_argument("--host", help="Override listen address")
    serve_parser.add_argument("--port", type=int, help="Override listen port")
    serve_parser.set_defaults(func=cmd_serve)

    run_parser = sub.add_parser("run", help="Execute one CPI action")
    run_parser.add_argument("tag", choices=sorted(COMMAND_TYPES), help="Action to execute")
    run_parser.add_argument("--cpi", metavar="PATH", help="CPI file (default: platform file in ./CPIs)")
    run_parser.add_argument(
        "-p",
        "--param",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Command parameter, e.g. name=web (repeatable)",
    )
    run_parser.add_argument(
        "--port", action="append", default=[], metavar="MAPPING", help="Port mapping (repeatable)"
    )
    run_parser.add_argument(
        "-e", "--env", action="append", default=[], metavar="KEY=VALUE", help="Environment variable (repeatable)"
    )
    run_parser.set_defaults(func=cmd_run)

    actions_parser = sub.add_parser("actions", help="List actions of a CPI file")
    actions_parser.add_argument("--cpi", metavar="PATH", help="CPI file (default: platform file in ./CPIs)")
    actions_parser.set_defaults(func=cmd_actions)

    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if not args.command:
        parser.print_help()
        return 0

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())

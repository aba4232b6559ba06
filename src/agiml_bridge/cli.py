"""
Command-line interface for AGIML Bridge.

Provides CLI commands for running and exercising the transform:
- run: Start the HTTP service
- render: Convert model output (file or stdin) and print it
- wrap: Print a user message wrapped in its AGIML envelope
- show-spec: Print the loaded specification text
- config: Print the configuration summary

Usage:
    agiml-bridge run [--host HOST] [--port PORT]
    agiml-bridge render [FILE]
    agiml-bridge wrap [TEXT]
    agiml-bridge show-spec
    agiml-bridge config

Every command accepts ``--settings PATH`` pointing at a YAML file of AGIML
setting overrides, applied on top of ``config/server.ini`` and the
environment.

Environment Variables:
    AGIML_HOST: Host to bind the HTTP service (default: 127.0.0.1)
    AGIML_PORT: Port for the HTTP service (default: 8000)
    AGIML_ENDPOINT: Image-generation service base URL
    AGIML_SPEC_FOLDER: Directory or base URL holding ``<spec>.agiml`` files
    AGIML_SPEC: Spec name to load (default: minimal)
"""

import argparse
import sys

from agiml_bridge.agiml.errors import MissingSpecificationError
from agiml_bridge.agiml.middleware import AgimlMiddleware
from agiml_bridge.agiml.settings import AgimlSettings, load_settings_file


def build_settings(args: argparse.Namespace) -> AgimlSettings:
    """
    Merge configuration with the optional ``--settings`` YAML file.

    Raises:
        FileNotFoundError, ValueError: If the settings file is unusable.
    """
    from agiml_bridge.config import config

    overrides = load_settings_file(args.settings) if args.settings else None
    return config.agiml_settings(overrides)


def build_middleware(args: argparse.Namespace) -> AgimlMiddleware | None:
    """
    Build the middleware, reporting failures on stderr.

    Returns:
        The middleware, or None if settings or spec could not be loaded.
    """
    try:
        return AgimlMiddleware(build_settings(args))
    except (OSError, ValueError) as e:
        print(f"Error reading settings: {e}", file=sys.stderr)
    except MissingSpecificationError as e:
        print(f"Error: {e}", file=sys.stderr)
    return None


def _read_input(path: str | None) -> str:
    if path is None or path == "-":
        return sys.stdin.read()
    with open(path, encoding="utf-8") as fh:
        return fh.read()


def cmd_run(args: argparse.Namespace) -> int:
    """
    Start the HTTP service.

    Returns:
        0 on clean shutdown, 1 if the middleware could not be built
    """
    from agiml_bridge.api.server import start_server

    middleware = build_middleware(args)
    if middleware is None:
        return 1

    start_server(host=args.host, port=args.port, middleware=middleware)
    return 0


def cmd_render(args: argparse.Namespace) -> int:
    """
    Convert model output read from a file or stdin.

    Returns:
        0 on success, 1 on error
    """
    middleware = build_middleware(args)
    if middleware is None:
        return 1

    try:
        text = _read_input(args.file)
    except OSError as e:
        print(f"Error reading input: {e}", file=sys.stderr)
        return 1

    print(middleware.process_response(text))
    return 0


def cmd_wrap(args: argparse.Namespace) -> int:
    """
    Print a user message wrapped in its envelope.

    Returns:
        0 on success
    """
    from agiml_bridge.agiml.envelope import wrap_user_message

    text = args.text if args.text is not None else sys.stdin.read().rstrip("\n")
    print(wrap_user_message(text))
    return 0


def cmd_show_spec(args: argparse.Namespace) -> int:
    """
    Print the specification text the middleware would inject.

    Returns:
        0 on success, 1 on error
    """
    middleware = build_middleware(args)
    if middleware is None:
        return 1

    print(middleware.spec)
    return 0


def cmd_config(args: argparse.Namespace) -> int:
    """
    Print the configuration summary.

    Returns:
        0 on success
    """
    from agiml_bridge.config import print_config_summary

    print_config_summary()
    return 0


def main() -> int:
    """
    Main CLI entry point.

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    from agiml_bridge.config import configure_logging

    parser = argparse.ArgumentParser(
        prog="agiml-bridge",
        description="AGIML envelope and image-directive transform for chat LLMs",
    )
    parser.add_argument(
        "--settings",
        metavar="PATH",
        help="YAML file with AGIML setting overrides",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # run command
    run_parser = subparsers.add_parser("run", help="Start the HTTP service")
    run_parser.add_argument("--host", help="Interface to bind (default: from config)")
    run_parser.add_argument("--port", type=int, help="Port to bind (default: from config)")
    run_parser.set_defaults(func=cmd_run)

    # render command
    render_parser = subparsers.add_parser("render", help="Convert model output")
    render_parser.add_argument("file", nargs="?", help="Input file (default: stdin)")
    render_parser.set_defaults(func=cmd_render)

    # wrap command
    wrap_parser = subparsers.add_parser("wrap", help="Envelope a user message")
    wrap_parser.add_argument("text", nargs="?", help="Message text (default: stdin)")
    wrap_parser.set_defaults(func=cmd_wrap)

    # show-spec command
    spec_parser = subparsers.add_parser("show-spec", help="Print the specification text")
    spec_parser.set_defaults(func=cmd_show_spec)

    # config command
    config_parser = subparsers.add_parser("config", help="Print configuration summary")
    config_parser.set_defaults(func=cmd_config)

    args = parser.parse_args()

    if args.command is None:
        parser.print_help()
        return 1

    configure_logging()
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())

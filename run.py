"""levelgen CLI entry point.

Provides subcommands for generating a layout snapshot as JSON and for running
the HTTP API server. Accepts configuration via flags and environment
variables, with optional .env loading.

Run `python run.py --help` for details.
"""

import argparse
import json
import os
import signal
import sys
from textwrap import dedent

try:  # Optional color support
    from colorama import Fore, Style
    from colorama import init as _color_init

    _color_init()  # pragma: no cover
    _COLOR_ENABLED = True
except ImportError:  # pragma: no cover

    class _Fore:
        RED = GREEN = CYAN = MAGENTA = YELLOW = BLUE = WHITE = ""

    class _Style:
        BRIGHT = NORMAL = RESET_ALL = ""

    Fore = _Fore()
    Style = _Style()
    _COLOR_ENABLED = False

# Disable colors if output is not a real terminal (e.g., during pytest capture)
try:
    if _COLOR_ENABLED and not sys.stdout.isatty():  # pragma: no cover - environment dependent
        _COLOR_ENABLED = False
except (AttributeError, ValueError):  # pragma: no cover
    _COLOR_ENABLED = False


def _load_version() -> str:
    try:
        with open(os.path.join(os.path.dirname(os.path.abspath(__file__)), "VERSION"), "r", encoding="utf-8") as f:
            return f.read().strip()
    except OSError:
        return "0.1.0"


__version__ = _load_version()

try:
    # Optional: load .env automatically if available
    from dotenv import load_dotenv
except ImportError:  # pragma: no cover - dotenv is optional
    load_dotenv = None


def parse_args(argv: list[str]) -> argparse.Namespace:
    description = """
    levelgen layout generator

    Generate a grid-aligned dungeon layout (rooms, corridors and open doors)
    as JSON, or run the HTTP API that serves layouts. Configuration can be
    provided via CLI flags or LEVELGEN_* environment variables. If both are
    present, CLI flags take precedence.
    """

    epilog = dedent(
        """
        Environment variables:
          LEVELGEN_ROOM_COUNT       Non-spawn rooms to place (default: 10)
          LEVELGEN_ROOM_TYPE_COUNT  Size of the room type catalog (default: 2)
          LEVELGEN_SEED             Seed for reproducible layouts (default: random)
          HOST                      Bind address for the web server (default: 0.0.0.0)
          PORT                      Port for the web server (default: 5000)

        Examples:
          # Print a 25-room layout for seed 42
          python run.py generate --rooms 25 --types 4 --seed 42

          # Include world positions scaled by 12x8 room prefabs, no raw grid
          python run.py generate --rooms 25 --world --room-width 8 --room-length 12 --no-grid

          # Run the API server on a custom port
          python run.py server --port 8080
        """
    )

    parser = argparse.ArgumentParser(
        prog="levelgen",
        description=dedent(description),
        epilog=epilog,
        formatter_class=argparse.RawTextHelpFormatter,
    )

    parser.add_argument(
        "--env-file",
        dest="env_file",
        help="Path to a .env file to load before processing flags",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"levelgen layout generator {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command")

    # generate subcommand
    gen_parser = subparsers.add_parser(
        "generate",
        help="Generate one layout and print it as JSON",
        formatter_class=argparse.RawTextHelpFormatter,
    )
    gen_parser.add_argument("--rooms", dest="room_count", type=int, default=None, help="Non-spawn rooms to place")
    gen_parser.add_argument(
        "--types", dest="room_type_count", type=int, default=None, help="Size of the room type catalog (>= 1)"
    )
    gen_parser.add_argument("--seed", type=int, default=None, help="Seed for a reproducible layout")
    gen_parser.add_argument("--room-width", dest="room_width", type=float, default=None, help="World size of a room on z")
    gen_parser.add_argument(
        "--room-length", dest="room_length", type=float, default=None, help="World size of a room on x"
    )
    gen_parser.add_argument("--world", action="store_true", help="Include scaled world positions per room")
    gen_parser.add_argument("--no-grid", dest="no_grid", action="store_true", help="Omit the raw grid from output")
    gen_parser.add_argument("--indent", type=int, default=None, help="JSON indent (default: compact)")
    gen_parser.add_argument("--output", "-o", default=None, help="Write JSON to this path instead of stdout")
    gen_parser.set_defaults(command="generate")

    # server subcommand
    server_parser = subparsers.add_parser(
        "server",
        help="Run the layout HTTP API",
        formatter_class=argparse.RawTextHelpFormatter,
        description="Run the Flask layout API server",
    )
    server_parser.add_argument(
        "--host",
        default=None,
        help="Host interface to bind (default: env HOST or 0.0.0.0)",
    )
    server_parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port to listen on (default: env PORT or 5000)",
    )
    server_parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable Flask debug mode with verbose error pages",
    )
    server_parser.set_defaults(command="server")

    args = parser.parse_args(argv)
    # If no subcommand provided, default to generate
    if args.command is None:
        args = parser.parse_args(list(argv) + ["generate"])
    return args


def run_generate(args) -> int:
    from levelgen.layout import ConfigurationError, InternalConsistencyError, LevelConfig, generate

    try:
        cfg = LevelConfig.from_env().merged(
            room_count=args.room_count,
            room_type_count=args.room_type_count,
            seed=args.seed,
            room_width=args.room_width,
            room_length=args.room_length,
        )
        result = generate(cfg)
    except ConfigurationError as e:
        print(f"[ERROR] {e.message}", file=sys.stderr)
        return 2
    except InternalConsistencyError as e:
        print(f"[ERROR] generation failed: {e}", file=sys.stderr)
        return 1
    payload = json.dumps(result.to_dict(include_grid=not args.no_grid, world=args.world), indent=args.indent)
    if args.output:
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(payload + "\n")
    else:
        print(payload)
    return 0


def main(argv: list[str]) -> int:
    # Load .env if requested and available
    args = parse_args(argv)
    if args and getattr(args, "env_file", None) and load_dotenv:
        load_dotenv(args.env_file)
    elif load_dotenv:
        # Load default .env if present (no error if missing)
        load_dotenv()

    mode = (getattr(args, "command", None) or "generate").lower()
    if mode == "generate":
        return run_generate(args)

    # Resolve configuration from CLI flags or env vars
    env_host = os.getenv("HOST", "0.0.0.0")
    env_port = int(os.getenv("PORT", "5000"))
    host = getattr(args, "host", None) or env_host
    port = int(getattr(args, "port", None) or env_port)
    debug = bool(getattr(args, "debug", False) or os.getenv("FLASK_DEBUG") == "1")

    def handle_sigint(sig, frame):
        print("\n[INFO] Shutting down server...")
        sys.exit(0)

    signal.signal(signal.SIGINT, handle_sigint)

    # Import server entrypoint only after environment is ready
    from levelgen.server import start_server

    title = (
        f"{Fore.CYAN}{Style.BRIGHT}Layout API Bootup{Style.RESET_ALL}" if _COLOR_ENABLED else "Layout API Bootup"
    )

    def label(text: str) -> str:
        return f"{Fore.YELLOW}{text}{Style.RESET_ALL}" if _COLOR_ENABLED else text

    def value(val: str | int) -> str:
        return f"{Fore.GREEN}{val}{Style.RESET_ALL}" if _COLOR_ENABLED else str(val)

    divider = (Fore.MAGENTA + "=" * 40 + Style.RESET_ALL) if _COLOR_ENABLED else "=" * 40
    lines = [
        divider,
        f"  {title}",
        divider,
        f"  {label('Host:'):12} {value(host)}",
        f"  {label('Port:'):12} {value(port)}",
        f"  {label('Debug:'):12} {value('YES' if debug else 'NO')}",
        divider,
        "",
    ]
    print("\n".join(lines))
    from levelgen.logging_utils import log

    log.info(event="listen", host=host, port=port, debug=debug)
    start_server(host=host, port=port, debug=debug)
    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))

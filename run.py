"""Project root entry point for launching the translation server."""

from __future__ import annotations

import argparse
import os
from typing import Any, Dict, List, Optional


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Free DeepL translation server")
    parser.add_argument("-p", "--port", type=int, default=None, help="Service port number")
    parser.add_argument(
        "-a", "--alt",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Return alternative translations",
    )
    parser.add_argument("-c", "--cors", default=None, help="Origin allowed for cross-domain access, e.g. '*'")
    parser.add_argument("--host", default=None, help="Interface to bind")
    return parser.parse_args(argv)


def build_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    from deeplx_bridge.config import normalize_cors_origin, validate_port

    overrides: Dict[str, Any] = {}
    if args.port is not None:
        overrides["port"] = validate_port(args.port)
    if args.alt is not None:
        overrides["alternatives"] = args.alt
    if args.cors is not None:
        overrides["cors_origin"] = normalize_cors_origin(args.cors)
    if args.host is not None:
        overrides["host"] = args.host
    return overrides


def main(argv: Optional[List[str]] = None):
    args = parse_args(argv)
    from deeplx_bridge.web import create_app

    app = create_app(build_overrides(args))
    settings = app.config["DEEPLX"]
    app.run(host=settings["host"], port=settings["port"], debug=bool(os.getenv("FLASK_DEBUG")))


if __name__ == "__main__":
    main()

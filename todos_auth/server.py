# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Command-line entrypoint running the todos server."""

from __future__ import annotations

import argparse
from collections.abc import Sequence

from todos_auth.app import create_app
from todos_auth.shared.config import DatabaseConfig, load_config
from todos_auth.shared.config.settings import IN_MEMORY_URLS


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Run the todos web application")
    parser.add_argument("-H", "--hostname", default="127.0.0.1", help="Interface to bind")
    parser.add_argument("-p", "--port", type=int, default=8080, help="Port to listen on")
    parser.add_argument(
        "-i",
        "--in-memory-database",
        action="store_true",
        help="Use a throwaway in-memory SQLite database (schema is always created)",
    )
    parser.add_argument(
        "-m",
        "--migrate",
        action="store_true",
        help="Create missing database tables before serving",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> None:
    args = build_parser().parse_args(argv)

    config = load_config()
    if args.in_memory_database:
        config = config.model_copy(
            update={"database": DatabaseConfig(url=IN_MEMORY_URLS[0])}
        )

    app = create_app(config, migrate=args.migrate)
    app.run(host=args.hostname, port=args.port, threaded=True)


if __name__ == "__main__":
    main()

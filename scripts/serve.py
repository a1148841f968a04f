"""Run the tempdrop HTTP server under uvicorn."""

from __future__ import annotations

import argparse
import sys

import uvicorn
from pydantic import ValidationError

from tempdrop.config import load_config
from tempdrop.logging import configure_logging
from tempdrop.main import create_app


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Serve the ephemeral file drop.")
    parser.add_argument("--host", help="Interface to bind (default from TEMPDROP_HOST).")
    parser.add_argument("--port", type=int, help="Port to bind (default from TEMPDROP_PORT).")
    parser.add_argument("--storage-root", help="Directory for stored files; wiped on start.")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv or [])
    overrides = {
        key: value
        for key, value in vars(args).items()
        if value is not None
    }
    try:
        config = load_config(**overrides)
    except ValidationError as exc:
        print(f"invalid configuration: {exc}", file=sys.stderr)
        return 2

    configure_logging(config.log_level.upper())
    uvicorn.run(
        create_app(config),
        host=config.host,
        port=config.port,
        log_level=config.log_level.lower(),
    )
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))

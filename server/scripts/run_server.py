from __future__ import annotations

import argparse
from typing import List

import uvicorn

from inline_calc.core.config import get_settings
from inline_calc.core.logging import build_logging_config


def parse_args(argv: List[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Serve the inline calculator API with uvicorn.")
    parser.add_argument("--host", default="127.0.0.1", help="Interface to bind.")
    parser.add_argument("--port", type=int, default=8000, help="Port to bind.")
    parser.add_argument("--reload", action="store_true", help="Restart on source changes.")
    return parser.parse_args(argv)


def main(argv: List[str] | None = None) -> None:
    args = parse_args(argv)
    uvicorn.run(
        "inline_calc.main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_config=build_logging_config(get_settings().log_level),
    )


if __name__ == "__main__":
    main()

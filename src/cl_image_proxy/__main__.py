"""Command line entry point: ``python -m cl_image_proxy``."""

import argparse
import sys
from pathlib import Path

import uvicorn
from loguru import logger
from pydantic import ValidationError

from . import __version__
from .app import create_app
from .common.config import ProxyConfig, ResizeFilter
from .utils.logging_setup import configure_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cl-image-proxy",
        description="On-demand image resizing proxy serving JPEGs from a local folder or remote CDN.",
    )
    parser.add_argument("-p", "--port", type=int, default=3000, help="Listening port")
    parser.add_argument("--host", default="0.0.0.0", help="Listening address")
    parser.add_argument("-r", "--remote-cdn", dest="remote_cdn", help="Remote origin base URL")
    parser.add_argument("-l", "--local-folder", dest="local_folder", type=Path, help="Local origin folder")
    parser.add_argument(
        "--filter",
        dest="resize_filter",
        choices=[f.value for f in ResizeFilter],
        default=ResizeFilter.LANCZOS.value,
        help="Resampling filter used for every request",
    )
    parser.add_argument("--log-level", default="INFO", help="Log level (DEBUG, INFO, ...)")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def load_config(args: argparse.Namespace) -> ProxyConfig | None:
    try:
        return ProxyConfig(
            local_folder=args.local_folder,
            remote_cdn=args.remote_cdn,
            resize_filter=ResizeFilter(args.resize_filter),
        )
    except ValidationError as exc:
        for error in exc.errors():
            logger.error(error["msg"])
        return None


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)

    config = load_config(args)
    if config is None:
        return 1

    logger.info(f"Listening on {args.host}:{args.port}")
    uvicorn.run(create_app(config), host=args.host, port=args.port, log_config=None)
    return 0


if __name__ == "__main__":
    sys.exit(main())

"""Run the preview server: python -m iap_preview"""

import argparse
import os
import sys

import uvicorn

from iap_preview import __version__


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="IAP Preview Store - serves fake purchase fixtures to design-time clients"
    )
    parser.add_argument(
        "--host",
        default=os.getenv("HOST", "127.0.0.1"),
        help="Host to bind to (default: 127.0.0.1)",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=int(os.getenv("PORT", "8090")),
        help="Port to bind to (default: 8090)",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default=os.getenv("LOG_LEVEL", "INFO"),
        help="Logging level (default: INFO)",
    )
    parser.add_argument(
        "--log-format",
        choices=["json", "console"],
        default=os.getenv("LOG_FORMAT", "console"),
        help="Log output format (default: console)",
    )
    parser.add_argument(
        "--config",
        default=os.getenv("CONFIG_PATH"),
        help="Path to a products.yaml file (default: packaged preview catalog)",
    )
    return parser


def main() -> None:
    args = build_parser().parse_args()

    # create_app() reads these when uvicorn imports iap_preview.main
    os.environ["LOG_LEVEL"] = args.log_level
    os.environ["LOG_FORMAT"] = args.log_format
    if args.config:
        os.environ["CONFIG_PATH"] = args.config

    if args.log_format == "console":
        print(f"IAP Preview Store v{__version__} on http://{args.host}:{args.port}")

    try:
        uvicorn.run(
            "iap_preview.main:app",
            host=args.host,
            port=args.port,
            log_level=args.log_level.lower(),
            access_log=False,
        )
    except KeyboardInterrupt:
        sys.exit(0)
    except Exception as e:
        print(f"Failed to start preview server: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()

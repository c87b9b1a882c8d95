"""
=============================================================================
COMMAND LINE ENTRY POINT
=============================================================================

Dry-run one request through a static mount and print the response, the
way ``curl -i`` would show it. Useful for checking what a deployment will
answer (which variant, which cache headers, which range) without starting
a server.

    python -m httpstatic /public/images/logo.png --at /public --from ./priv/static
    python -m httpstatic /static/app.js --gzip -H "Accept-Encoding: gzip"
    python -m httpstatic /static/video.mp4 -H "Range: bytes=-500" --include-body

The request runs through:

    LoggingMiddleware ──► StaticMiddleware ──► 404 handler

Exit status is 0 for 2xx/3xx answers and 1 otherwise.

=============================================================================
"""

import argparse
import os
import sys
from typing import List, Optional, Tuple

from . import __version__
from .config import DEFAULT_CACHE_CONTROL_FOR_ETAGS, StaticConfig
from .http.request import build_request
from .http.response import not_found
from .log import LOG_LEVELS, configure_logging
from .middleware import LoggingMiddleware, MiddlewarePipeline
from .static import StaticMiddleware


def _parse_header(value: str) -> Tuple[str, str]:
    name, sep, header_value = value.partition(":")
    if not sep or not name.strip():
        raise argparse.ArgumentTypeError(f"expected 'Name: value', got {value!r}")
    return name.strip(), header_value.strip()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="httpstatic",
        description="Show how a static mount answers a request",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m httpstatic /static/app.js                    # GET against ./ mounted at /static
  python -m httpstatic /public/logo.png --at /public --from ./priv/static
  python -m httpstatic /static/app.js --gzip --brotli -H "Accept-Encoding: br, gzip"
  python -m httpstatic /static/app.js?vsn=42             # versioned request
        """,
    )

    parser.add_argument("target", help="Request target, e.g. /static/app.js?vsn=1")

    # ─────────────────────────────────────────────────────────────────────
    # MOUNT OPTIONS
    # ─────────────────────────────────────────────────────────────────────

    parser.add_argument("--at", default="/static", help="Mount point (default: /static)")
    parser.add_argument(
        "--from", dest="from_",
        default=os.getenv("STATIC_FROM", "."),
        help="Directory to serve (default: $STATIC_FROM or the current directory)",
    )
    parser.add_argument("--only", action="append", default=[], help="Exact first-segment filter (repeatable)")
    parser.add_argument(
        "--only-matching", action="append", default=[],
        help="Prefix first-segment filter (repeatable)",
    )
    parser.add_argument("--gzip", action="store_true", help="Serve FILE.gz when accepted")
    parser.add_argument("--brotli", action="store_true", help="Serve FILE.br when accepted")
    parser.add_argument(
        "--no-etag", action="store_true",
        help="Disable etag revalidation (no cache_control_for_etags)",
    )

    # ─────────────────────────────────────────────────────────────────────
    # REQUEST OPTIONS
    # ─────────────────────────────────────────────────────────────────────

    parser.add_argument("--method", "-X", default="GET", help="Request method (default: GET)")
    parser.add_argument(
        "--header", "-H", dest="headers", action="append", default=[], type=_parse_header,
        help="Request header 'Name: value' (repeatable)",
    )
    parser.add_argument("--include-body", action="store_true", help="Print the response body too")

    # ─────────────────────────────────────────────────────────────────────
    # META
    # ─────────────────────────────────────────────────────────────────────

    parser.add_argument("--log-level", "-l", choices=LOG_LEVELS, default="WARNING")
    parser.add_argument("--version", "-v", action="version", version=f"httpstatic {__version__}")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)

    try:
        config = StaticConfig.build(
            at=args.at,
            from_=args.from_,
            only=args.only,
            only_matching=args.only_matching,
            gzip=args.gzip,
            brotli=args.brotli,
            cache_control_for_etags=None if args.no_etag else DEFAULT_CACHE_CONTROL_FOR_ETAGS,
        )
    except (TypeError, ValueError) as e:
        print(f"httpstatic: {e}", file=sys.stderr)
        return 2

    handler = (MiddlewarePipeline()
        .add(LoggingMiddleware(include_request_id=False))
        .add(StaticMiddleware(config))
        .wrap(lambda request: not_found()))

    request = build_request(args.method, args.target, args.headers)
    response = handler(request)

    include_body = args.include_body and request.method != "HEAD"
    sys.stdout.buffer.write(response.to_bytes(include_body=include_body))
    sys.stdout.buffer.flush()

    return 0 if response.status < 400 else 1


if __name__ == "__main__":
    sys.exit(main())

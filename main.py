#!/usr/bin/env python3
"""Entry point for the wikiserve content server.

Subcommands:
    web              Start the web server (fragments reloaded per request by default)
    web --cached     Serve fragments from the cache filled at startup
"""

import argparse
import logging

from wikiserve import create_app
from wikiserve.config import LIVE_MODE, SERVER_HOST, SERVER_PORT, site_dirs


def main():
    parser = argparse.ArgumentParser(description="wikiserve content server")
    subparsers = parser.add_subparsers(dest="command")

    web_parser = subparsers.add_parser("web", help="Start the web server")
    mode = web_parser.add_mutually_exclusive_group()
    mode.add_argument(
        "--live",
        dest="live",
        action="store_true",
        help="Reload fragments from disk on every request",
    )
    mode.add_argument(
        "--cached",
        dest="live",
        action="store_false",
        help="Serve fragments from the cache filled at startup",
    )
    web_parser.set_defaults(live=LIVE_MODE)
    web_parser.add_argument(
        "--root", help="Site directory holding Data/ and Frontend/",
    )
    web_parser.add_argument(
        "--host", default=SERVER_HOST, help="Bind address",
    )
    web_parser.add_argument(
        "--port", type=int, default=SERVER_PORT, help="Port",
    )
    web_parser.add_argument("--certfile", help="TLS certificate (PEM)")
    web_parser.add_argument("--keyfile", help="TLS private key (PEM)")
    web_parser.add_argument(
        "--log-level", default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level",
    )

    args = parser.parse_args()

    if args.command == "web":
        if bool(args.certfile) != bool(args.keyfile):
            parser.error("--certfile and --keyfile must be given together")

        logging.basicConfig(
            level=args.log_level,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )

        config = {"live": args.live}
        if args.root:
            config.update(site_dirs(args.root))
        app = create_app(config)

        ssl_context = (args.certfile, args.keyfile) if args.certfile else None
        scheme = "https" if ssl_context else "http"

        print(f"[Server] Serving wikiserve at {scheme}://{args.host}:{args.port}")
        print(f"[Server] Fragment mode: {'live' if args.live else 'cached'}")
        app.run(host=args.host, port=args.port, ssl_context=ssl_context, threaded=True)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()

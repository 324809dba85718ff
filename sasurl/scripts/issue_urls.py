#!/usr/bin/env python3
"""
Issue SAS URLs from the shell using the service settings (env / .env).

Read URL for an existing blob:
    uv run sasurl read 3f0c7a5e-2d4b-4c8e-9a51-6b7d1e2f3a4b.png

Local redirect path instead of the signed URL:
    uv run sasurl read 3f0c7a5e-2d4b-4c8e-9a51-6b7d1e2f3a4b.png --local

Five upload URLs for new .jpg blobs:
    uv run sasurl write --count 5 --ext jpg
"""

from __future__ import annotations

import argparse
import json
import sys

from sasurl.core.config import get_settings
from sasurl.core.errors import ConfigurationError, InvalidArgumentError
from sasurl.core.logging_config import setup_logging
from sasurl.services.issuer import SignedUrlIssuer


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Issue Azure Blob SAS URLs",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    sub = parser.add_subparsers(dest="command", required=True)

    read = sub.add_parser("read", help="Issue a read URL for a blob")
    read.add_argument("name", help="Blob name")
    read.add_argument("--local", action="store_true", help="Print the local redirect path instead")

    write = sub.add_parser("write", help="Generate blob names with write URLs")
    write.add_argument("--count", type=int, default=1, help="Number of URLs to issue (default: 1)")
    write.add_argument("--ext", default=None, help="Extension appended to generated names, e.g. png")

    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    settings = get_settings()
    setup_logging(level=settings.log_level, json_format=settings.log_json)

    try:
        issuer = SignedUrlIssuer.from_settings(settings)
        if args.command == "read":
            if args.local:
                result = {"name": args.name, "path": issuer.local_read_path(args.name)}
            else:
                result = {"name": args.name, "url": issuer.issue_read_url(args.name)}
        else:
            result = [item.model_dump() for item in issuer.issue_write_batch(args.count, args.ext)]
    except (ConfigurationError, InvalidArgumentError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    print(json.dumps(result, indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

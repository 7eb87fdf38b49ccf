"""Command-line helper for querying and creating Crowd groups.

This module serves as a CLI wrapper around app.core.crowd services.
"""
from __future__ import annotations
import argparse
import json
import logging
import sys
from pathlib import Path

SCRIPT_DIR = Path(__file__).parent
PROJECT_ROOT = SCRIPT_DIR.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from app.config.settings import (
    load_settings,
    DEFAULT_REQUEST_TIMEOUT,
    DEFAULT_SEARCH_MAX_PAGES,
    DEFAULT_SEARCH_PAGE_SIZE,
)
from app.core.crowd import CrowdClient, CrowdError, GroupService


def _print_json(data) -> None:
    print(json.dumps(data, indent=2, ensure_ascii=False))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Crowd group directory helper",
        epilog="Options left unset are read from CROWD_* environment variables and /run/secrets.",
    )
    parser.add_argument("--crowd-url")
    parser.add_argument("--app-name")
    parser.add_argument("--app-password")
    parser.add_argument("--timeout", type=float, help=f"Request timeout in seconds (default {DEFAULT_REQUEST_TIMEOUT})")
    parser.add_argument("--page-size", type=int, help=f"Search page size (default {DEFAULT_SEARCH_PAGE_SIZE})")
    parser.add_argument("--max-pages", type=int, help=f"Search page cap (default {DEFAULT_SEARCH_MAX_PAGES})")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log each request to stderr")

    sub = parser.add_subparsers(dest="cmd")

    sm = sub.add_parser("memberships", help="List a user's groups")
    sm.add_argument("--username", required=True)
    sm.add_argument("--nested", action="store_true", help="Include groups inherited through other groups")

    sg = sub.add_parser("group", help="Show one group")
    sg.add_argument("--name", required=True)

    sc = sub.add_parser("create", help="Create an active group")
    sc.add_argument("--name", required=True)
    sc.add_argument("--description", default="")

    sf = sub.add_parser("find", help="Find active groups whose name contains a string")
    sf.add_argument("--query", required=True)

    return parser


def main() -> None:
    """Command-line entry point."""
    parser = build_parser()
    args = parser.parse_args()

    if not args.cmd:
        parser.print_help()
        return

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        settings = load_settings(
            crowd_url=args.crowd_url,
            app_name=args.app_name,
            app_password=args.app_password,
            request_timeout=args.timeout,
            search_page_size=args.page_size,
            search_max_pages=args.max_pages,
        )
    except (RuntimeError, ValueError) as e:
        parser.error(str(e))

    with CrowdClient.from_settings(settings) as client:
        service = GroupService(client, page_size=settings.search_page_size, max_pages=settings.search_max_pages)
        try:
            if args.cmd == "memberships":
                groups = service.get_memberships(args.username, include_nested=args.nested)
                _print_json([group.to_dict() for group in groups])
            elif args.cmd == "group":
                _print_json(service.get_group(args.name).to_dict())
            elif args.cmd == "create":
                created = service.create_group(args.name, args.description)
                _print_json({"name": args.name, "created": created})
            elif args.cmd == "find":
                groups = service.find_groups(args.query)
                _print_json([group.to_dict() for group in groups])
        except CrowdError as e:
            print(f"[crowd] Error: {e}", file=sys.stderr)
            sys.exit(1)


if __name__ == "__main__":
    main()

"""Command line entry point for hashed-store.

Lists or refreshes GitLab groups and archives through a HashedStore.
"""

import argparse
import asyncio
import json
import sys
from typing import List, Optional, Union

from .application.services import HashedStore
from .config import HashedStoreSettings, get_settings, setup_logging
from .core.exceptions import HashedStoreError
from .infrastructure.backends import GitLabArchiveBackend, GitLabGroupBackend


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="hashed-store",
        description="List or refresh GitLab groups and archives through a hashed store"
    )
    parser.add_argument("--url", help="GitLab instance URL (default: HASHED_STORE_GITLAB_URL)")
    parser.add_argument("--token", help="GitLab private token (default: HASHED_STORE_GITLAB_TOKEN)")
    parser.add_argument("--log-level", help="Log level (default: HASHED_STORE_LOG_LEVEL)")

    subparsers = parser.add_subparsers(dest="command", required=True)

    groups = subparsers.add_parser("groups", help="Group names, or groups with --fetch")
    groups.add_argument("--fetch", action="store_true", help="Fetch every group and print JSON")

    archives = subparsers.add_parser("archives", help="Archive names, or archives with --fetch")
    archives.add_argument("--group", help="Only list archives in this group")
    archives.add_argument("--fetch", action="store_true", help="Fetch every archive and print JSON")

    return parser


def resolve_settings(args: argparse.Namespace) -> HashedStoreSettings:
    """Apply command line overrides on top of environment settings."""
    overrides = {}
    if args.url:
        overrides["gitlab_url"] = args.url.rstrip("/")
    if args.token:
        overrides["gitlab_token"] = args.token
    if args.log_level:
        overrides["log_level"] = args.log_level.upper()

    settings = get_settings()
    if not overrides:
        return settings
    return HashedStoreSettings(**{**settings.model_dump(), **overrides})


def create_backend(
    args: argparse.Namespace,
    settings: HashedStoreSettings
) -> Union[GitLabGroupBackend, GitLabArchiveBackend]:
    if args.command == "archives":
        return GitLabArchiveBackend.from_settings(settings, group=args.group)
    return GitLabGroupBackend.from_settings(settings)


async def run(args: argparse.Namespace, settings: HashedStoreSettings) -> int:
    backend = create_backend(args, settings)

    try:
        if not args.fetch:
            for name in await backend.fetch_object_names():
                print(name)
            return 0

        async with HashedStore(backend) as store:
            objects = await store.get_objects()
        print(json.dumps([obj.model_dump(by_alias=True) for obj in objects], indent=2))
        return 0

    except HashedStoreError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return 1

    finally:
        await backend.aclose()


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)
    settings = resolve_settings(args)
    setup_logging(settings)

    return asyncio.run(run(args, settings))


if __name__ == "__main__":
    sys.exit(main())

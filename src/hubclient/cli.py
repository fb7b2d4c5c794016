"""Command-line interface for hubclient.

Usage:
    hubclient labels list OWNER REPO
    hubclient search issues "repo:octocat/hello-world is:open" --sort comments --order desc
    hubclient search repos "language:python" --all --limit 200

Prints one JSON object per line. Configuration comes from HUBCLIENT_*
environment variables (see hubclient.config).
"""

import argparse
import asyncio
import logging
import sys

from .client import GitHubClient
from .config import get_config
from .errors import GitHubClientError
from .logging_config import configure_logging
from .options import MAX_PER_PAGE, QueryOptionsBuilder, SortDirection
from .search import IssuesSort, ReposSort, SearchIssuesOptions, SearchReposOptions

logger = logging.getLogger("hubclient.cli")


def _emit(model) -> None:
    print(model.model_dump_json())


async def list_labels(github: GitHubClient, args: argparse.Namespace) -> None:
    for label in await github.labels(args.owner, args.repo).list():
        _emit(label)


def _build_options(builder: QueryOptionsBuilder, args: argparse.Namespace):
    if args.sort:
        builder.sort(args.sort)
    if args.order:
        builder.order(args.order)
    if args.per_page:
        builder.per_page(args.per_page)
    return builder.build()


async def run_search(github: GitHubClient, args: argparse.Namespace) -> None:
    search = github.search()
    if args.kind == "issues":
        accessor = search.issues()
        options = _build_options(SearchIssuesOptions.builder(), args)
    else:
        accessor = search.repos()
        options = _build_options(SearchReposOptions.builder(), args)

    if not args.all:
        result = await accessor.list(args.query, options)
        logger.info(
            "search_page",
            extra={"total_count": result.total_count, "incomplete": result.incomplete_results},
        )
        for item in result.items[: args.limit]:
            _emit(item)
        return

    async with accessor.iter(args.query, options) as stream:
        if args.limit != 0:
            async for item in stream:
                _emit(item)
                if args.limit is not None and stream.items_yielded >= args.limit:
                    break
    logger.info(
        "search_stream_done",
        extra={"pages_fetched": stream.pages_fetched, "items": stream.items_yielded},
    )


def _non_negative_int(value: str) -> int:
    number = int(value)
    if number < 0:
        raise argparse.ArgumentTypeError(f"must be >= 0, got {number}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="hubclient",
        description="Query the GitHub REST API",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Configuration:
  HUBCLIENT_TOKEN=ghp_your_token_here
  HUBCLIENT_BASE_URL=https://api.github.com
  HUBCLIENT_LOG_LEVEL=INFO
        """,
    )
    parser.add_argument("--base-url", help="API root (overrides HUBCLIENT_BASE_URL)")
    commands = parser.add_subparsers(dest="command", required=True)

    labels = commands.add_parser("labels", help="Repository labels")
    label_commands = labels.add_subparsers(dest="action", required=True)
    label_list = label_commands.add_parser("list", help="List labels")
    label_list.add_argument("owner")
    label_list.add_argument("repo")

    search = commands.add_parser("search", help="Search issues or repositories")
    search.add_argument("kind", choices=["issues", "repos"])
    search.add_argument("query", help="Search query, e.g. 'repo:owner/name is:open'")
    search.add_argument(
        "--sort",
        choices=sorted({s.value for s in IssuesSort} | {s.value for s in ReposSort}),
    )
    search.add_argument("--order", choices=[d.value for d in SortDirection])
    search.add_argument("--per-page", type=int, metavar=f"1-{MAX_PER_PAGE}")
    search.add_argument("--all", action="store_true", help="Follow every page")
    search.add_argument("--limit", type=_non_negative_int, help="Stop after N items")

    return parser


async def run(args: argparse.Namespace) -> None:
    async with GitHubClient(args.base_url) as github:
        if args.command == "labels":
            await list_labels(github, args)
        else:
            await run_search(github, args)


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    config = get_config()
    configure_logging(config.log_level, config.log_format)

    try:
        asyncio.run(run(args))
    except ValueError as e:
        # Invalid option values (e.g. --sort not valid for this search kind)
        print(f"ERROR: {e}", file=sys.stderr)
        return 2
    except GitHubClientError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())

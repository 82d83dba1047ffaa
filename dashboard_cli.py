#!/usr/bin/env python3
"""CLI for inspecting and editing a filtering resolver through its API"""

import argparse
import asyncio
import logging
import sys

from pydantic import ValidationError

from dnsboard.client import ResolverAPIClient
from dnsboard.config import get_config, reload_config
from dnsboard.mutations import EntryMutations
from dnsboard.pages import denylist_widget, hosts_widget, query_log_widget
from dnsboard.polling import DashboardStore, LIST_ENTRIES, QUERY_LOGS, STATS
from dnsboard.scheduler import shutdown_scheduler, start_polling
from dnsboard.version import get_version
from dnsboard.views.activity import ACTIVITY_MODES, MODE_TOTAL
from dnsboard.views.dashboard import DashboardViews
from dnsboard.views.distribution import DISTRIBUTION_VIEWS, VIEW_TYPE
from dnsboard.views.formatting import format_hour
from dnsboard.views.stats import STATS_LABELS

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False):
    """Configure root logging from config"""
    config = get_config()
    handlers = [logging.StreamHandler(sys.stderr)]
    if config.logging.file:
        handlers.append(logging.FileHandler(config.logging.file))

    level = logging.DEBUG if verbose else getattr(logging, config.logging.level.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=handlers,
    )


def build_client() -> ResolverAPIClient:
    config = get_config()
    return ResolverAPIClient(
        base_url=config.api.base_url,
        verify_ssl=config.api.verify_ssl,
        timeout=config.api.timeout,
    )


def fail_on_error(store: DashboardStore, key: str):
    error = store.collection(key).error
    if error:
        logger.error(f"Could not load {key}: {error}")
        sys.exit(1)


def print_stats(views: DashboardViews):
    stats = views.stats()
    if stats is None:
        print("No stats available")
        return
    print("\n" + "=" * 40)
    for key, label in STATS_LABELS.items():
        print(f"{label:<20} {getattr(stats, key)}")
    print("=" * 40 + "\n")


async def show_stats(args, store: DashboardStore, views: DashboardViews):
    """Print the dashboard counters"""
    await store.refresh(STATS)
    fail_on_error(store, STATS)
    print_stats(views)


def print_table(widget, args):
    table = widget.table

    for pair in args.filter or []:
        if "=" not in pair:
            logger.error(f"Filter must look like column=value: {pair}")
            sys.exit(1)
        key, value = pair.split("=", 1)
        # Type and status cells hold integer codes
        table.set_column_filter(key, int(value) if value.isdigit() else value)

    if args.search:
        table.set_global_filter(args.search)

    if args.sort:
        table.toggle_sorting(args.sort)
        if args.desc:
            table.toggle_sorting(args.sort)

    if args.page_size:
        table.set_page_size(args.page_size)

    if args.page:
        widget.pagination.submit(str(args.page))

    columns = [c for c in table.visible_columns() if not c.synthetic]
    width = max(12, 120 // max(len(columns), 1))

    print("\n" + "=" * width * len(columns))
    print("".join(f"{c.header:<{width}}" for c in columns))
    print("=" * width * len(columns))
    for row in table.row_model():
        cells = []
        for column in columns:
            text = column.render(row.get_value(column))
            if len(text) > width - 1:
                text = text[:width - 4] + "..."
            cells.append(f"{text:<{width}}")
        print("".join(cells))
    print("=" * width * len(columns))

    if table.page_count:
        print(f"{table.location_text}  |  page {table.page_index + 1} of {table.page_count}\n")
    else:
        print("No entries\n")


async def list_hosts(args, store: DashboardStore, views: DashboardViews):
    """List hosts overrides"""
    await store.refresh(LIST_ENTRIES)
    fail_on_error(store, LIST_ENTRIES)
    print_table(hosts_widget(views, EntryMutations(store.client, store), get_config().table), args)


async def list_denylist(args, store: DashboardStore, views: DashboardViews):
    """List block directives"""
    await store.refresh(LIST_ENTRIES)
    fail_on_error(store, LIST_ENTRIES)
    print_table(denylist_widget(views, EntryMutations(store.client, store), get_config().table), args)


async def list_logs(args, store: DashboardStore, views: DashboardViews):
    """List the query log"""
    await store.refresh(QUERY_LOGS)
    fail_on_error(store, QUERY_LOGS)
    print_table(query_log_widget(views, get_config().table), args)


async def show_activity(args, store: DashboardStore, views: DashboardViews):
    """Print requests per hour over the last 24 hours"""
    await store.refresh(QUERY_LOGS)
    fail_on_error(store, QUERY_LOGS)
    activity = views.activity()

    print("\nDistribution of requests over the last 24 hours")
    print("=" * 60)
    if args.mode == MODE_TOTAL:
        for hour, total in zip(activity.hours, activity.total_series()):
            print(f"{format_hour(hour)}  {total:>6}  {'#' * min(total, 50)}")
    else:
        for series in activity.client_series():
            print(f"\n{series.client} ({series.color})")
            for hour, value in zip(activity.hours, series.values):
                if value:
                    print(f"  {format_hour(hour)}  {value:>6}")
    print("=" * 60 + "\n")


async def show_distribution(args, store: DashboardStore, views: DashboardViews):
    """Print query counts by type or by status over the last 24 hours"""
    await store.refresh(QUERY_LOGS)
    fail_on_error(store, QUERY_LOGS)
    distribution = views.distribution()

    print(f"\nLast 24 hours queries by {DISTRIBUTION_VIEWS[args.view].lower()} ({distribution.total} queries)")
    print("=" * 40)
    for part in distribution.view(args.view):
        print(f"{part.label:<20} {part.total:>8}")
    print("=" * 40 + "\n")


async def run_mutation(mutation) -> None:
    try:
        result = await mutation
    except ValidationError as e:
        for error in e.errors():
            logger.error(f"Invalid {'.'.join(str(p) for p in error['loc'])}: {error['msg']}")
        sys.exit(2)

    if not result.ok:
        logger.error(f"Request failed: {result.error}")
        sys.exit(1)
    print("OK")


async def allow_domain(args, store: DashboardStore, views: DashboardViews):
    """Add or update a hosts override"""
    mutations = EntryMutations(store.client, store)
    await run_mutation(mutations.modify_domain(args.domain, args.ip, label=args.label, id=args.id))


async def block_directive(args, store: DashboardStore, views: DashboardViews):
    """Add or update a block directive"""
    mutations = EntryMutations(store.client, store)
    await run_mutation(mutations.modify_block_entry(args.directive, label=args.label, id=args.id))


async def delete_entries(args, store: DashboardStore, views: DashboardViews):
    """Delete entries by id"""
    mutations = EntryMutations(store.client, store)
    await run_mutation(mutations.delete_entries(args.ids))


async def watch(args, store: DashboardStore, views: DashboardViews):
    """Poll in the background and print the counters on every stats interval"""
    start_polling(store)
    interval = get_config().polling.stats_seconds
    loop = asyncio.get_running_loop()
    deadline = loop.time() + args.duration if args.duration else None
    try:
        while deadline is None or loop.time() < deadline:
            await asyncio.sleep(interval)
            status = store.collection(STATS).status()
            if status.error_message:
                print(f"Stats unavailable: {status.error_message}")
            else:
                print_stats(views)
    finally:
        shutdown_scheduler()


async def run_command(args):
    client = build_client()
    store = DashboardStore(client, get_config().polling)
    views = DashboardViews(store)
    try:
        await args.func(args, store, views)
    finally:
        await client.close()


def add_table_arguments(parser):
    parser.add_argument("--search", "-s", help="Fuzzy search across searchable columns")
    parser.add_argument("--filter", "-f", action="append", help="Column filter, column=value (repeatable)")
    parser.add_argument("--sort", help="Column to sort by")
    parser.add_argument("--desc", action="store_true", help="Sort descending")
    parser.add_argument("--page", "-p", type=int, help="Page number (1-based)")
    parser.add_argument("--page-size", type=int, help="Rows per page")


def main():
    """Main CLI entry point"""
    parser = argparse.ArgumentParser(
        description="dnsboard - filtering resolver dashboard CLI"
    )
    parser.add_argument("--config", "-c", help="Path to config.yaml")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {get_version()}")
    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    stats_parser = subparsers.add_parser("stats", help="Show dashboard counters")
    stats_parser.set_defaults(func=show_stats)

    hosts_parser = subparsers.add_parser("hosts", help="List hosts overrides")
    add_table_arguments(hosts_parser)
    hosts_parser.set_defaults(func=list_hosts)

    denylist_parser = subparsers.add_parser("denylist", help="List block directives")
    add_table_arguments(denylist_parser)
    denylist_parser.set_defaults(func=list_denylist)

    logs_parser = subparsers.add_parser("logs", help="List the query log")
    add_table_arguments(logs_parser)
    logs_parser.set_defaults(func=list_logs)

    activity_parser = subparsers.add_parser("activity", help="Requests per hour, last 24 hours")
    activity_parser.add_argument("--mode", choices=list(ACTIVITY_MODES), default=MODE_TOTAL)
    activity_parser.set_defaults(func=show_activity)

    distribution_parser = subparsers.add_parser("distribution", help="Queries by type or status, last 24 hours")
    distribution_parser.add_argument("--view", choices=list(DISTRIBUTION_VIEWS), default=VIEW_TYPE)
    distribution_parser.set_defaults(func=show_distribution)

    allow_parser = subparsers.add_parser("allow", help="Add or update a hosts override")
    allow_parser.add_argument("domain")
    allow_parser.add_argument("ip")
    allow_parser.add_argument("--label", "-l")
    allow_parser.add_argument("--id", type=int, help="Entry to update")
    allow_parser.set_defaults(func=allow_domain)

    block_parser = subparsers.add_parser("block", help="Add or update a block directive (domain or regex)")
    block_parser.add_argument("directive")
    block_parser.add_argument("--label", "-l")
    block_parser.add_argument("--id", type=int, help="Entry to update")
    block_parser.set_defaults(func=block_directive)

    delete_parser = subparsers.add_parser("delete", help="Delete entries by id")
    delete_parser.add_argument("ids", type=int, nargs="+")
    delete_parser.set_defaults(func=delete_entries)

    watch_parser = subparsers.add_parser("watch", help="Poll and print counters")
    watch_parser.add_argument("--duration", type=int, help="Stop after this many seconds")
    watch_parser.set_defaults(func=watch)

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    if args.config:
        reload_config(args.config)
    setup_logging(args.verbose)

    try:
        asyncio.run(run_command(args))
    except ValueError as e:
        logger.error(str(e))
        sys.exit(2)


if __name__ == "__main__":
    main()

"""
cli.py
======
Command-line entry point for shelfscan.

Usage:
    shelfscan run --config suppliers.json          # Extract products, print results
    shelfscan run --supplier-id 3 --save           # Extract a stored supplier and save a capture
    shelfscan add --config suppliers.json          # Store supplier configs
    shelfscan list                                 # Show stored suppliers
    shelfscan products --supplier-id 3             # Show the latest capture
    shelfscan tick                                 # Capture every stored supplier that is due
"""

import argparse
import json
import sys
from datetime import datetime

from rich.console import Console
from rich.table import Table

from shelfscan.core.pipeline import THEME, ExtractionOrchestrator
from shelfscan.exceptions import ConfigError
from shelfscan.models import ExtractionRun, RunStatus, SupplierConfig
from shelfscan.outputs import format_json, format_markdown, format_run, save_run
from shelfscan.retry import run_with_retry
from shelfscan.settings import Settings, load_supplier_configs
from shelfscan.storage import JSONProductStore, SupplierStorage
from shelfscan.utils.logging import setup_local_logging, setup_logfire


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(prog='shelfscan', description='Capture supplier product listings with selectors')
    parser.add_argument('--log-level', type=str, help='File log level (default: SHELFSCAN_LOG_LEVEL or INFO)')
    subparsers = parser.add_subparsers(dest='command', required=True)

    run_parser = subparsers.add_parser('run', help='Run extraction for one or more suppliers')
    source = run_parser.add_mutually_exclusive_group(required=True)
    source.add_argument('--config', type=str, help='JSON file with one supplier config or a list of them')
    source.add_argument('--supplier-id', type=int, help='Id of a stored supplier')
    run_parser.add_argument('--supplier', type=str, help='Only run the config with this name')
    run_parser.add_argument('--retries', type=int, help='Runs attempted per supplier when a run fails')
    run_parser.add_argument('--format', choices=['json', 'markdown'], default='json', help='Output format')
    run_parser.add_argument('--output', type=str, help='Write the result to this file instead of stdout')
    run_parser.add_argument('--save', action='store_true', help='Save a capture (requires --supplier-id)')

    add_parser = subparsers.add_parser('add', help='Store supplier configs')
    add_parser.add_argument('--config', type=str, required=True, help='JSON file with supplier configs')

    subparsers.add_parser('list', help='Show stored suppliers')

    products_parser = subparsers.add_parser('products', help='Show the latest capture for a supplier')
    products_parser.add_argument('--supplier-id', type=int, required=True, help='Id of a stored supplier')

    tick_parser = subparsers.add_parser('tick', help='Capture every stored supplier that is due now')
    tick_parser.add_argument('--retries', type=int, help='Runs attempted per supplier when a run fails')

    return parser


def main(argv: list[str] | None = None) -> int:  # noqa: C901
    """Main entry point.

    Returns:
        Process exit code: 0 on success, 1 on configuration errors or failed runs

    """
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.command == 'run' and args.save and args.config:
        parser.error('--save needs --supplier-id; store suppliers with "add" first')
    console = Console(theme=THEME)

    try:
        settings = Settings.from_env()
    except ConfigError as e:
        console.print(f'[danger]{e}[/danger]')
        return 1

    setup_local_logging(args.log_level or settings.log_level)
    setup_logfire(settings.logfire_token)

    orchestrator = ExtractionOrchestrator(console=console, timeout=settings.timeout, user_agent=settings.user_agent)
    suppliers = SupplierStorage()

    try:
        if args.command == 'add':
            for config in load_supplier_configs(args.config):
                supplier_id = suppliers.add(config)
                console.print(f'[success]✓ Stored {config.name or config.source_url} as supplier {supplier_id}[/success]')
            return 0

        if args.command == 'list':
            _show_suppliers(console, suppliers)
            return 0

        if args.command == 'products':
            return _show_products(console, args.supplier_id)

        if args.command == 'tick':
            return _tick(orchestrator, suppliers, args.retries or settings.retries)

        return _run(console, orchestrator, suppliers, settings, args)

    except ConfigError as e:
        console.print(f'[danger]{e}[/danger]')
        return 1


def _run(
    console: Console,
    orchestrator: ExtractionOrchestrator,
    suppliers: SupplierStorage,
    settings: Settings,
    args: argparse.Namespace,
) -> int:
    """Handle the run command."""
    retries = args.retries or settings.retries

    targets: list[tuple[int | None, SupplierConfig]]
    if args.supplier_id is not None:
        config = suppliers.load(args.supplier_id)
        if config is None:
            console.print(f'[danger]Supplier not found: {args.supplier_id}[/danger]')
            return 1
        targets = [(args.supplier_id, config)]
    else:
        targets = [(None, config) for config in load_supplier_configs(args.config)]

    if args.supplier:
        targets = [(sid, config) for sid, config in targets if config.name == args.supplier]
        if not targets:
            console.print(f'[danger]No supplier named {args.supplier!r}[/danger]')
            return 1

    if retries > 1:
        runs = [
            run_with_retry(lambda config=config: orchestrator.run(config), max_attempts=retries) for _, config in targets
        ]
    else:
        runs = orchestrator.run_many([config for _, config in targets], max_workers=settings.max_workers)

    if args.save:
        store = JSONProductStore()
        for (supplier_id, _), run in zip(targets, runs):
            if supplier_id is not None and run.success:
                store.save(run.records, supplier_id)
                suppliers.mark_run(supplier_id, run.started_at)

    _emit(console, runs, args.format, args.output)
    if len(runs) > 1:
        orchestrator.show_runs(runs)
    return 1 if any(run.status is RunStatus.FAILED for run in runs) else 0


def _tick(orchestrator: ExtractionOrchestrator, suppliers: SupplierStorage, retries: int) -> int:
    """Capture every due supplier once."""
    now = datetime.now()
    due = suppliers.due(now)
    if not due:
        orchestrator.console.print('[info]No suppliers due[/info]')
        return 0

    store = JSONProductStore()
    runs = []
    for supplier_id, config in due:
        run = run_with_retry(
            lambda config=config, supplier_id=supplier_id: orchestrator.capture(config, supplier_id, store),
            max_attempts=retries,
        )
        if run.success:
            suppliers.mark_run(supplier_id, now)
        runs.append(run)

    orchestrator.show_runs(runs)
    return 1 if any(run.status is RunStatus.FAILED for run in runs) else 0


def _emit(console: Console, runs: list[ExtractionRun], output_format: str, output: str | None) -> None:
    """Print or save formatted runs."""
    if output:
        if len(runs) == 1:
            save_run(output, runs[0], output_format)
        elif output_format == 'markdown':
            with open(output, 'w', encoding='utf-8') as f:
                f.write('\n\n'.join(format_markdown(run) for run in runs))
        else:
            with open(output, 'w', encoding='utf-8') as f:
                json.dump([format_json(run) for run in runs], f, indent=2, ensure_ascii=False)
        console.print(f'[success]✓ Saved output to: {output}[/success]')
        return

    for run in runs:
        formatted = format_run(run, output_format)
        if isinstance(formatted, dict):
            console.print_json(json.dumps(formatted, ensure_ascii=False))
        else:
            console.print(formatted, markup=False)


def _show_suppliers(console: Console, suppliers: SupplierStorage) -> None:
    stored = suppliers.list_suppliers()
    if not stored:
        console.print('[warning]No suppliers stored[/warning]')
        return

    table = Table(title='Suppliers')
    table.add_column('Id', justify='right')
    table.add_column('Name', style='cyan')
    table.add_column('Type')
    table.add_column('URL')
    table.add_column('Schedule')
    table.add_column('Last run', style='dim')

    for supplier_id, config in stored:
        schedule = config.schedule
        when = f'{schedule.kind} {schedule.hour:02d}:00' + (f' day {schedule.day}' if schedule.kind == 'weekly' else '')
        last_run = suppliers.last_run(supplier_id)
        table.add_row(
            str(supplier_id),
            config.name,
            config.source_type,
            config.source_url,
            when,
            last_run.isoformat(timespec='minutes') if last_run else 'never',
        )
    console.print(table)


def _show_products(console: Console, supplier_id: int) -> int:
    store = JSONProductStore()
    if not store.list_captures(supplier_id):
        console.print(f'[warning]No captures for supplier {supplier_id}[/warning]')
        return 1

    records = store.load_products(supplier_id)
    if not records:
        console.print(f'[warning]Latest capture for supplier {supplier_id} has no products[/warning]')
        return 0

    table = Table(title=f'Latest capture for supplier {supplier_id}')
    table.add_column('#', justify='right')
    table.add_column('Name', style='cyan')
    table.add_column('Price', justify='right')
    table.add_column('Promotion', style='magenta')
    table.add_column('Availability')
    for index, record in enumerate(records, 1):
        price = str(record.price) if record.price is not None else '—'
        table.add_row(str(index), record.name, price, record.promotion, record.availability)
    console.print(table)
    return 0


if __name__ == '__main__':
    sys.exit(main())

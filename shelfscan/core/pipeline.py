"""Extraction orchestrator: one fetch, one parse, one pass of fielding per supplier run.

Expected outcomes (empty catalog, transport failure, unparsable page) come back
as an ExtractionRun status instead of an exception.
"""

import logging
import time
from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor
from contextlib import nullcontext
from datetime import datetime
from typing import Protocol

import logfire
from rich.console import Console
from rich.table import Table
from rich.theme import Theme

from shelfscan.core.extraction import FieldExtractor
from shelfscan.core.fetcher import DocumentFetcher, create_fetcher
from shelfscan.exceptions import FetchError, ParseError
from shelfscan.models import ExtractionRun, FetchResult, ProductRecord, RunStatus, SupplierConfig

THEME = Theme(
    {
        'info': 'dim cyan',
        'warning': 'magenta',
        'danger': 'bold red',
        'success': 'bold green',
        'step': 'bold blue',
    }
)


class ProductStore(Protocol):
    """Persistence collaborator receiving the records of completed runs."""

    def save(self, records: Iterable[ProductRecord], supplier_id: int | str) -> None:
        """Persist records for a supplier, assigning identity and capture time."""
        ...


class ExtractionOrchestrator:
    """Runs the extraction engine against one supplier config at a time.

    Attributes:
        console: Rich console for operator-facing output
        extractor: Field extractor used on fetched documents
        fetcher: Fetcher shared by all runs, or None to open a fresh one per run
        timeout: Fetch timeout in seconds for per-run fetchers
        user_agent: User agent override for per-run fetchers
        logger: Logger instance

    """

    def __init__(
        self,
        fetcher: DocumentFetcher | None = None,
        extractor: FieldExtractor | None = None,
        console: Console | None = None,
        timeout: float = 30,
        user_agent: str | None = None,
    ):
        """Initialize the orchestrator.

        Args:
            fetcher: Fetcher to use for every run. Defaults to None (a new SimpleFetcher per run).
            extractor: Field extractor. Defaults to None (BeautifulSoup based).
            console: Rich console. Defaults to None (themed console on stdout).
            timeout: Fetch timeout in seconds for per-run fetchers. Defaults to 30.
            user_agent: User agent for per-run fetchers. Defaults to None.

        """
        self.console = console or Console(theme=THEME)
        self.extractor = extractor or FieldExtractor()
        self.fetcher = fetcher
        self.timeout = timeout
        self.user_agent = user_agent
        self.logger = logging.getLogger(__name__)

    def run(self, config: SupplierConfig) -> ExtractionRun:
        """Run one extraction against a supplier.

        Args:
            config: Validated supplier configuration

        Returns:
            ExtractionRun with status COMPLETED, COMPLETED_WITH_WARNINGS or FAILED

        """
        started_at = datetime.now()
        start_time = time.time()
        url = config.source_url

        def finish(status: RunStatus, **fields) -> ExtractionRun:
            run = ExtractionRun(
                supplier_url=url,
                status=status,
                started_at=started_at,
                duration=time.time() - start_time,
                **fields,
            )
            self._log_outcome(config, run)
            return run

        with logfire.span('extraction_run', url=url, supplier=config.name):
            self.logger.info(f'Starting run for {config.name or url}')

            if config.source_type != 'HTTP':
                return finish(RunStatus.FAILED, reason=f'unsupported source type: {config.source_type}')

            try:
                self.console.print(f'[step]Fetching {url}...[/step]')
                result = self._fetch(url)

                self.console.print(f'[step]Extracting products ({result.size:,} bytes)...[/step]')
                outcome = self.extractor.extract(result.content, config, encoding=result.encoding)

            except FetchError as e:
                return finish(RunStatus.FAILED, reason=f'transport failure: {e.reason}')
            except ParseError as e:
                return finish(RunStatus.FAILED, reason=f'parse failure: {e.reason}')
            except Exception as e:
                self.logger.exception(f'Unexpected error during run for {url}')
                return finish(RunStatus.FAILED, reason=f'internal error: {type(e).__name__}: {e}')

            if outcome.matched_count == 0:
                warning = f'list selector {config.list_selector!r} matched no elements; page layout may have changed'
                return finish(RunStatus.COMPLETED_WITH_WARNINGS, reason=warning, warnings=(warning,))

            return finish(
                RunStatus.COMPLETED,
                records=outcome.records,
                matched_count=outcome.matched_count,
                fielded_count=len(outcome.records),
            )

    def run_many(self, configs: list[SupplierConfig], max_workers: int = 4) -> list[ExtractionRun]:
        """Run several suppliers concurrently.

        Runs share nothing, so they are executed on a thread pool without
        coordination. Results come back in the order of configs.

        Args:
            configs: Supplier configurations
            max_workers: Maximum concurrent runs. Defaults to 4.

        Returns:
            One ExtractionRun per config, in input order

        """
        with logfire.span('extraction_runs', total=len(configs)):
            with ThreadPoolExecutor(max_workers=max_workers) as pool:
                runs = list(pool.map(self.run, configs))

            logfire.info(
                'Runs complete',
                total=len(runs),
                completed=sum(1 for r in runs if r.status is RunStatus.COMPLETED),
                failed=sum(1 for r in runs if r.status is RunStatus.FAILED),
            )
        return runs

    def capture(self, config: SupplierConfig, supplier_id: int | str, store: ProductStore) -> ExtractionRun:
        """Run a supplier and hand the records to the store unless the run failed.

        Args:
            config: Supplier configuration
            supplier_id: Identity of the supplier in the store
            store: Persistence collaborator

        Returns:
            The ExtractionRun; nothing is stored when it FAILED

        """
        run = self.run(config)
        if run.status is RunStatus.FAILED:
            self.logger.info(f'Skipping save for supplier {supplier_id}: {run.reason}')
            return run

        store.save(run.records, supplier_id)
        self.console.print(f'[success]Saved {len(run.records)} records for supplier {supplier_id}[/success]')
        return run

    def _fetch(self, url: str) -> FetchResult:
        """Fetch with the shared fetcher, or a fresh one that is closed afterwards."""
        if self.fetcher is not None:
            context = nullcontext(self.fetcher)
        else:
            context = create_fetcher('simple', timeout=self.timeout, user_agent=self.user_agent)
        with context as fetcher:
            return fetcher.fetch(url)

    def _log_outcome(self, config: SupplierConfig, run: ExtractionRun) -> None:
        """Report a finished run to the console, the log and logfire."""
        label = config.name or run.supplier_url
        if run.status is RunStatus.FAILED:
            self.console.print(f'[danger]✗ {label}: {run.reason}[/danger]')
            self.logger.warning(f'Run failed for {label}: {run.reason}')
            logfire.error('Run failed', url=run.supplier_url, reason=run.reason)
        elif run.status is RunStatus.COMPLETED_WITH_WARNINGS:
            self.console.print(f'[warning]⚠ {label}: {run.reason}[/warning]')
            self.logger.warning(f'Run for {label} completed with warnings: {run.reason}')
            logfire.warn('Run completed with warnings', url=run.supplier_url, reason=run.reason)
        else:
            self.console.print(
                f'[success]✓ {label}: {run.fielded_count} records, {run.priced_count} priced '
                f'({run.duration:.2f}s)[/success]'
            )
            self.logger.info(f'Run for {label} completed with {run.fielded_count} records')
            logfire.info('Run completed', url=run.supplier_url, records=run.fielded_count)

    def show_runs(self, runs: list[ExtractionRun]) -> None:
        """Print a summary table of runs."""
        table = Table(title='Extraction Runs')
        table.add_column('Source', style='cyan')
        table.add_column('Status')
        table.add_column('Matched', justify='right')
        table.add_column('Priced', justify='right')
        table.add_column('Reason', style='dim')

        styles = {
            RunStatus.COMPLETED: 'success',
            RunStatus.COMPLETED_WITH_WARNINGS: 'warning',
            RunStatus.FAILED: 'danger',
        }
        for run in runs:
            table.add_row(
                run.supplier_url,
                f'[{styles[run.status]}]{run.status.value}[/{styles[run.status]}]',
                str(run.matched_count),
                str(run.priced_count),
                run.reason or '',
            )
        self.console.print(table)

"""Markdown output formatter for extraction runs."""

import os

from shelfscan.models import ExtractionRun


def format_markdown(run: ExtractionRun) -> str:
    """Format an extraction run as a Markdown report with a product table.

    Args:
        run: Finished extraction run

    Returns:
        Formatted markdown string.

    """
    lines = [f'# Products from {run.supplier_url}', '']

    lines.append('---')
    lines.append(f'**Status:** {run.status.value}')
    lines.append(f'**Captured:** {run.started_at.isoformat()}')
    lines.append(f'**Matched:** {run.matched_count}')
    if run.reason:
        lines.append(f'**Note:** {run.reason}')
    lines.append('---')
    lines.append('')

    if not run.records:
        lines.append('_No products extracted._')
        return '\n'.join(lines)

    lines.append('| # | Name | Price | Promotion | Availability |')
    lines.append('|---|------|-------|-----------|--------------|')
    for index, record in enumerate(run.records, 1):
        price = str(record.price) if record.price is not None else '—'
        cells = [str(index), record.name, price, record.promotion, record.availability]
        lines.append('| ' + ' | '.join(_escape(cell) for cell in cells) + ' |')

    return '\n'.join(lines)


def save_markdown(filepath: str, run: ExtractionRun):
    """Format and save a run as a Markdown file.

    Args:
        filepath: Path to save the file
        run: Finished extraction run

    """
    directory = os.path.dirname(filepath)
    if directory:
        os.makedirs(directory, exist_ok=True)

    with open(filepath, 'w', encoding='utf-8') as f:
        f.write(format_markdown(run))


def _escape(cell: str) -> str:
    """Keep cell text from breaking the table."""
    return cell.replace('|', '\\|').replace('\n', ' ')

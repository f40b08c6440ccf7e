"""Output formatting for extraction runs."""

from shelfscan.models import ExtractionRun
from shelfscan.outputs.json_output import format_json, save_json
from shelfscan.outputs.markdown_output import format_markdown, save_markdown


def format_run(run: ExtractionRun, output_format: str = 'json') -> str | dict:
    """Format a run in the specified format.

    Args:
        run: Finished extraction run
        output_format: Output format ('json' or 'markdown'). Defaults to 'json'.

    Returns:
        Formatted run - dict for JSON, string for Markdown.

    """
    if output_format == 'markdown':
        return format_markdown(run)
    return format_json(run)


def save_run(filepath: str, run: ExtractionRun, output_format: str = 'json') -> str:
    """Format and save a run to file.

    Returns:
        Path to the saved file.

    """
    if output_format == 'markdown':
        save_markdown(filepath, run)
    else:
        save_json(filepath, run)
    return filepath


__all__ = ['format_json', 'format_markdown', 'format_run', 'save_json', 'save_markdown', 'save_run']

"""JSON output formatter for extraction runs."""

import json
import os

from shelfscan.models import ExtractionRun


def format_json(run: ExtractionRun) -> dict:
    """Format an extraction run as JSON-ready data.

    Prices are rendered as strings so no precision is lost.

    Args:
        run: Finished extraction run

    Returns:
        Dictionary with run metadata and products, ready for JSON serialization.

    """
    return {
        'url': run.supplier_url,
        'status': run.status.value,
        'reason': run.reason,
        'started_at': run.started_at.isoformat(),
        'duration': round(run.duration, 3),
        'matched_count': run.matched_count,
        'fielded_count': run.fielded_count,
        'products': [
            {
                'name': record.name,
                'price': str(record.price) if record.price is not None else None,
                'promotion': record.promotion,
                'availability': record.availability,
            }
            for record in run.records
        ],
    }


def save_json(filepath: str, run: ExtractionRun):
    """Format and save a run as a JSON file.

    Args:
        filepath: Path to save the file
        run: Finished extraction run

    """
    directory = os.path.dirname(filepath)
    if directory:
        os.makedirs(directory, exist_ok=True)

    with open(filepath, 'w', encoding='utf-8') as f:
        json.dump(format_json(run), f, indent=2, ensure_ascii=False)

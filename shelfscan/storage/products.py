"""Stores captured product records.

Each save is one capture: the records of one completed run, stamped with the
supplier id and the capture time.
"""

import json
import os
from collections.abc import Iterable
from datetime import datetime
from decimal import Decimal
from typing import Any

from shelfscan.models import ProductRecord
from shelfscan.utils.files import init_shelfscan


def _record_row(record: ProductRecord, supplier_id: int | str, index: int, retrieved_at: str) -> dict[str, Any]:
    return {
        'id': index,
        'supplier_id': supplier_id,
        'name': record.name,
        'price': str(record.price) if record.price is not None else None,
        'promotion': record.promotion,
        'availability': record.availability,
        'retrieved_at': retrieved_at,
    }


def _row_record(row: dict[str, Any]) -> ProductRecord:
    price = row.get('price')
    return ProductRecord(
        name=row.get('name', ''),
        price=Decimal(price) if price is not None else None,
        promotion=row.get('promotion', ''),
        availability=row.get('availability', ''),
    )


class InMemoryProductStore:
    """Keeps captures in memory, for tests and dry runs.

    Attributes:
        captures: (supplier_id, records) pairs in save order

    """

    def __init__(self):
        """Initialize an empty store."""
        self.captures: list[tuple[int | str, tuple[ProductRecord, ...]]] = []

    def save(self, records: Iterable[ProductRecord], supplier_id: int | str) -> None:
        """Remember a capture."""
        self.captures.append((supplier_id, tuple(records)))

    def load_products(self, supplier_id: int | str) -> list[ProductRecord]:
        """Return the records of the latest capture for a supplier."""
        for saved_id, records in reversed(self.captures):
            if saved_id == supplier_id:
                return list(records)
        return []


class JSONProductStore:
    """Writes captures as JSON files under .shelfscan/products/<supplier_id>/.

    Attributes:
        storage_dir: Directory path where capture files are stored

    """

    def __init__(self, storage_dir: str = 'products'):
        """Initialize the store.

        Args:
            storage_dir: Workspace sub-directory for capture files. Defaults to 'products'.

        """
        self.storage_dir = str(init_shelfscan(storage_dir))

    def save(self, records: Iterable[ProductRecord], supplier_id: int | str) -> None:
        """Write one capture file for a supplier.

        Args:
            records: Records of a completed run, in document order
            supplier_id: Supplier the records belong to

        """
        captured_at = datetime.now()
        retrieved_at = captured_at.isoformat()
        rows = [_record_row(record, supplier_id, index, retrieved_at) for index, record in enumerate(records, 1)]

        supplier_dir = self._supplier_dir(supplier_id)
        os.makedirs(supplier_dir, exist_ok=True)
        filepath = os.path.join(supplier_dir, f'capture_{captured_at.strftime("%Y%m%d_%H%M%S_%f")}.json')

        data = {'supplier_id': supplier_id, 'retrieved_at': retrieved_at, 'products': rows}
        with open(filepath, 'w', encoding='utf-8') as f:
            json.dump(data, f, indent=2, ensure_ascii=False)

    def list_captures(self, supplier_id: int | str) -> list[str]:
        """List capture files for a supplier, newest first.

        Returns:
            File paths; empty if the supplier has no captures

        """
        supplier_dir = self._supplier_dir(supplier_id)
        if not os.path.exists(supplier_dir):
            return []

        files = [name for name in os.listdir(supplier_dir) if name.startswith('capture_') and name.endswith('.json')]
        return [os.path.join(supplier_dir, name) for name in sorted(files, reverse=True)]

    def load_capture(self, filepath: str) -> dict[str, Any]:
        """Load a capture file as written by save()."""
        with open(filepath, encoding='utf-8') as f:
            data: dict[str, Any] = json.load(f)
        return data

    def load_products(self, supplier_id: int | str) -> list[ProductRecord]:
        """Return the records of the latest capture for a supplier, in document order."""
        captures = self.list_captures(supplier_id)
        if not captures:
            return []
        return [_row_record(row) for row in self.load_capture(captures[0])['products']]

    def _supplier_dir(self, supplier_id: int | str) -> str:
        safe_id = str(supplier_id).replace('/', '_').replace('.', '_')
        return os.path.join(self.storage_dir, f'supplier_{safe_id}')

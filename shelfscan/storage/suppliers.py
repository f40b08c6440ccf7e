"""Saves and loads supplier configurations to/from JSON files."""

import json
import logging
import os
from datetime import datetime
from typing import Any

from shelfscan.exceptions import ConfigError
from shelfscan.models import SupplierConfig
from shelfscan.utils.files import init_shelfscan


class SupplierStorage:
    """Manages supplier configs in .shelfscan/suppliers/, one file per supplier.

    Passwords are stored in clear text only because the source needs them;
    keep the workspace private.

    Attributes:
        storage_dir: Directory path where supplier files are stored
        logger: Logger instance

    """

    def __init__(self, storage_dir: str = 'suppliers'):
        """Initialize the storage manager.

        Args:
            storage_dir: Workspace sub-directory for supplier files. Defaults to 'suppliers'.

        """
        self.storage_dir = str(init_shelfscan(storage_dir))
        self.logger = logging.getLogger(__name__)

    def add(self, config: SupplierConfig) -> int:
        """Store a new supplier and assign it the next free id.

        Args:
            config: Validated supplier configuration

        Returns:
            The new supplier id

        """
        supplier_id = max(self.list_ids(), default=0) + 1
        self.save(supplier_id, config)
        return supplier_id

    def save(self, supplier_id: int, config: SupplierConfig, last_run: datetime | None = None) -> str:
        """Write a supplier file.

        Args:
            supplier_id: Supplier id
            config: Supplier configuration
            last_run: When the supplier was last captured, if ever

        Returns:
            Path to the saved file.

        """
        data = config.model_dump(mode='json')
        if config.password is not None:
            data['password'] = config.password.get_secret_value()

        filepath = self._get_filepath(supplier_id)
        payload = {
            'id': supplier_id,
            'last_run': last_run.isoformat() if last_run else None,
            'config': data,
        }
        with open(filepath, 'w', encoding='utf-8') as f:
            json.dump(payload, f, indent=2, ensure_ascii=False)
        return filepath

    def load(self, supplier_id: int) -> SupplierConfig | None:
        """Load a supplier config.

        Returns:
            SupplierConfig, or None if the supplier does not exist

        Raises:
            ConfigError: If the stored file is corrupt or the config no longer validates

        """
        data = self._load_file(supplier_id)
        if data is None:
            return None
        return SupplierConfig.from_dict(data['config'])

    def last_run(self, supplier_id: int) -> datetime | None:
        """Return when the supplier was last captured, or None."""
        data = self._load_file(supplier_id)
        if not data or not data.get('last_run'):
            return None
        return datetime.fromisoformat(data['last_run'])

    def mark_run(self, supplier_id: int, when: datetime) -> None:
        """Record a capture time for a supplier."""
        config = self.load(supplier_id)
        if config is None:
            raise ConfigError(f'Supplier not found: {supplier_id}')
        self.save(supplier_id, config, last_run=when)

    def list_ids(self) -> list[int]:
        """List stored supplier ids in ascending order."""
        if not os.path.exists(self.storage_dir):
            return []

        ids = []
        for filename in os.listdir(self.storage_dir):
            if filename.startswith('supplier_') and filename.endswith('.json'):
                stem = filename[len('supplier_') : -len('.json')]
                if stem.isdigit():
                    ids.append(int(stem))
        return sorted(ids)

    def list_suppliers(self) -> list[tuple[int, SupplierConfig]]:
        """Return all readable stored suppliers as (id, config) pairs.

        Suppliers whose file is corrupt or no longer validates are logged and
        skipped, so one bad file does not hide the others.
        """
        suppliers = []
        for supplier_id in self.list_ids():
            try:
                config = self.load(supplier_id)
            except ConfigError as e:
                self.logger.warning(f'Skipping supplier {supplier_id}: {e}')
                continue
            if config is not None:
                suppliers.append((supplier_id, config))
        return suppliers

    def due(self, now: datetime) -> list[tuple[int, SupplierConfig]]:
        """Return readable stored suppliers whose schedule is due at the given time."""
        return [
            (supplier_id, config)
            for supplier_id, config in self.list_suppliers()
            if config.schedule.is_due(self.last_run(supplier_id), now)
        ]

    def _load_file(self, supplier_id: int) -> dict[str, Any] | None:
        filepath = self._get_filepath(supplier_id)
        if not os.path.exists(filepath):
            return None
        try:
            with open(filepath, encoding='utf-8') as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f'Corrupt supplier file {filepath}: {e}') from None
        if not isinstance(data, dict) or not isinstance(data.get('config'), dict):
            raise ConfigError(f'Corrupt supplier file {filepath}: missing config object')
        return data

    def _get_filepath(self, supplier_id: int) -> str:
        return os.path.join(self.storage_dir, f'supplier_{supplier_id}.json')

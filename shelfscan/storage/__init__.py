"""Persistence for suppliers and captured products."""

from shelfscan.storage.products import InMemoryProductStore, JSONProductStore
from shelfscan.storage.suppliers import SupplierStorage

__all__ = ['InMemoryProductStore', 'JSONProductStore', 'SupplierStorage']

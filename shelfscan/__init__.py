"""shelfscan - selector-driven product listing capture.

Fetch a supplier page, pick out every product with CSS selectors, and hand
normalized records to storage.
"""

from shelfscan.core import (
    Document,
    DocumentFetcher,
    DocumentParser,
    ExtractionOrchestrator,
    FieldExtractor,
    ProductStore,
    SimpleFetcher,
    SoupParser,
    create_fetcher,
    normalize_price,
)
from shelfscan.exceptions import ConfigError, FetchError, ParseError, ShelfscanError
from shelfscan.models import (
    ExtractionOutcome,
    ExtractionRun,
    FetchResult,
    ProductRecord,
    RunStatus,
    Schedule,
    SupplierConfig,
)
from shelfscan.retry import get_retryer, run_with_retry
from shelfscan.settings import Settings, load_supplier_configs
from shelfscan.storage import InMemoryProductStore, JSONProductStore, SupplierStorage
from shelfscan.utils import init_shelfscan

__all__ = [
    # Engine
    'ExtractionOrchestrator',
    'FieldExtractor',
    'normalize_price',
    # Fetching and parsing
    'DocumentFetcher',
    'SimpleFetcher',
    'create_fetcher',
    'Document',
    'DocumentParser',
    'SoupParser',
    # Models
    'SupplierConfig',
    'Schedule',
    'FetchResult',
    'ProductRecord',
    'ExtractionOutcome',
    'ExtractionRun',
    'RunStatus',
    # Errors
    'ShelfscanError',
    'ConfigError',
    'FetchError',
    'ParseError',
    # Collaborators
    'ProductStore',
    'InMemoryProductStore',
    'JSONProductStore',
    'SupplierStorage',
    'get_retryer',
    'run_with_retry',
    # Configuration
    'Settings',
    'load_supplier_configs',
    'init_shelfscan',
]

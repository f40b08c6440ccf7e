"""Core extraction engine: fetching, parsing, fielding and orchestration."""

from shelfscan.core.extraction import FieldExtractor
from shelfscan.core.fetcher import DocumentFetcher, SimpleFetcher, create_fetcher
from shelfscan.core.normalizer import normalize_price
from shelfscan.core.parsing import Document, DocumentParser, SoupDocument, SoupParser
from shelfscan.core.pipeline import THEME, ExtractionOrchestrator, ProductStore

__all__ = [
    'Document',
    'DocumentFetcher',
    'DocumentParser',
    'ExtractionOrchestrator',
    'FieldExtractor',
    'ProductStore',
    'SimpleFetcher',
    'SoupDocument',
    'SoupParser',
    'THEME',
    'create_fetcher',
    'normalize_price',
]

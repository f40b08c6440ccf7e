"""Extracts product records from a document using a supplier's selectors."""

import logging
from typing import Any

from rich.console import Console

from shelfscan.core.normalizer import normalize_price
from shelfscan.core.parsing import Document, DocumentParser, SoupParser
from shelfscan.models import ExtractionOutcome, ProductRecord, SupplierConfig


class FieldExtractor:
    """Turns a raw supplier document into ordered ProductRecords.

    Every element matched by the list selector becomes exactly one record.
    Each field is resolved on its own inside that element, so a missing
    promotion badge never costs the record its name or price.

    Attributes:
        parser: Structural-query capability used to parse documents
        console: Optional Rich console for progress output
        logger: Logger for debug-level detail

    """

    def __init__(self, parser: DocumentParser | None = None, console: Console | None = None):
        """Initialize the extractor.

        Args:
            parser: Document parser to use. Defaults to None (BeautifulSoup with lxml).
            console: Rich console for progress output. Defaults to None (silent).

        """
        self.parser = parser or SoupParser()
        self.console = console
        self.logger = logging.getLogger(__name__)

    def extract(self, content: bytes, config: SupplierConfig, encoding: str | None = None) -> ExtractionOutcome:
        """Parse a document and extract one record per list element.

        Args:
            content: Raw document bytes
            config: Supplier configuration holding the selectors
            encoding: Encoding declared by the transport, if any

        Returns:
            ExtractionOutcome with records in document order and the match count

        Raises:
            ParseError: If the document cannot be parsed at all

        """
        document = self.parser.parse(content, encoding)
        return self.extract_from_document(document, config)

    def extract_from_document(self, document: Document, config: SupplierConfig) -> ExtractionOutcome:
        """Extract records from an already parsed document.

        Args:
            document: Parsed document
            config: Supplier configuration holding the selectors

        Returns:
            ExtractionOutcome with records in document order and the match count

        """
        elements = document.query_all(config.list_selector)
        selectors = config.field_selectors()

        if self.console:
            self.console.print(f'  ↻ Matched {len(elements)} elements with {config.list_selector!r}')

        records = tuple(self._extract_record(document, element, selectors) for element in elements)

        self.logger.debug(
            'Extracted %d records (%d priced) from %s',
            len(records),
            sum(1 for r in records if r.price is not None),
            config.source_url,
        )
        return ExtractionOutcome(records=records, matched_count=len(elements))

    def _extract_record(self, document: Document, element: Any, selectors: dict[str, str | None]) -> ProductRecord:
        """Build a record from one list element."""
        fields = {name: self._field_text(document, element, selector) for name, selector in selectors.items()}
        return ProductRecord(
            name=fields['name'],
            price=normalize_price(fields['price']),
            promotion=fields['promotion'],
            availability=fields['availability'],
        )

    def _field_text(self, document: Document, element: Any, selector: str | None) -> str:
        """Return the trimmed text of every match of selector inside element.

        Args:
            document: Parsed document
            element: List element that scopes the query
            selector: Field selector, or None when the field is not configured

        Returns:
            Concatenated text of the matches, or '' if the selector is absent or matches nothing

        """
        if not selector:
            return ''
        matches = document.query_all(selector, element)
        return ''.join(document.text(match) for match in matches).strip()

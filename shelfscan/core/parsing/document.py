"""Structural-query capability used by the extractor.

The extractor only depends on the DocumentParser and Document protocols, so a
different markup library can be plugged in without touching extraction logic.
"""

import re
from typing import Any, Protocol

from bs4 import BeautifulSoup, UnicodeDammit
from bs4.element import Tag

from shelfscan.exceptions import ParseError

_MARKUP = re.compile(r'<\s*[A-Za-z!?/]')


class Document(Protocol):
    """A parsed document that can be queried with selectors."""

    def query_all(self, selector: str, scope: Any = None) -> list[Any]:
        """Return elements matching selector, within scope or the whole document."""
        ...

    def text(self, element: Any) -> str:
        """Return the full text content of an element."""
        ...


class DocumentParser(Protocol):
    """Turns raw document bytes into a queryable Document."""

    def parse(self, content: bytes, encoding: str | None = None) -> Document:
        """Parse raw bytes.

        Raises:
            ParseError: If the content has no markup structure at all

        """
        ...


class SoupDocument:
    """Document backed by a BeautifulSoup tree.

    Attributes:
        soup: The parsed tree

    """

    def __init__(self, soup: BeautifulSoup):
        """Wrap an already parsed tree."""
        self.soup = soup

    def query_all(self, selector: str, scope: Tag | None = None) -> list[Tag]:
        """Return elements matching a CSS selector, in document order.

        Args:
            selector: CSS selector
            scope: Element to search beneath. Defaults to None (whole document).

        Returns:
            Matching elements; empty list if nothing matches

        """
        root = self.soup if scope is None else scope
        return list(root.select(selector))

    def text(self, element: Tag) -> str:
        """Return the concatenated text of an element and its descendants."""
        return element.get_text()


class SoupParser:
    """Parses HTML/XML with BeautifulSoup.

    Attributes:
        features: BeautifulSoup tree builder to use

    """

    def __init__(self, features: str = 'lxml'):
        """Initialize the parser.

        Args:
            features: Tree builder name passed to BeautifulSoup. Defaults to 'lxml'.

        """
        self.features = features

    def parse(self, content: bytes, encoding: str | None = None) -> SoupDocument:
        """Parse raw document bytes into a SoupDocument.

        Malformed markup is repaired by the tree builder; only documents with no
        markup at all are rejected.

        Args:
            content: Raw document bytes
            encoding: Encoding declared by the transport, if any

        Returns:
            Parsed document

        Raises:
            ParseError: If the document is empty, cannot be decoded, or holds no markup

        """
        text = self._decode(content, encoding)

        if not text.strip():
            raise ParseError('document is empty')
        if not _MARKUP.search(text):
            raise ParseError('document contains no markup')

        soup = BeautifulSoup(text, self.features)
        if soup.find(True) is None:
            raise ParseError('no elements found after parsing')
        return SoupDocument(soup)

    def _decode(self, content: bytes | str, encoding: str | None) -> str:
        if isinstance(content, str):
            return content
        if encoding:
            try:
                return content.decode(encoding)
            except (UnicodeDecodeError, LookupError):
                pass
        if b'\x00' in content[:1024]:
            raise ParseError('document is binary, not markup')
        dammit = UnicodeDammit(content, is_html=True)
        if dammit.unicode_markup is None:
            raise ParseError('could not determine document encoding')
        return dammit.unicode_markup

"""Document parsing capability."""

from shelfscan.core.parsing.document import Document, DocumentParser, SoupDocument, SoupParser

__all__ = ['Document', 'DocumentParser', 'SoupDocument', 'SoupParser']

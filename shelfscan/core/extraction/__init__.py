"""Selector-driven product extraction."""

from shelfscan.core.extraction.extractor import FieldExtractor

__all__ = ['FieldExtractor']

"""Fetcher factory and exports."""

from shelfscan.core.fetcher.base import DocumentFetcher
from shelfscan.core.fetcher.simple import SimpleFetcher


def create_fetcher(fetcher_type: str = 'simple', **kwargs) -> DocumentFetcher:
    """Create a document fetcher.

    Args:
        fetcher_type: Type of fetcher ('simple')
        **kwargs: Additional arguments for the fetcher

    Returns:
        DocumentFetcher instance

    """
    fetchers: dict[str, type[DocumentFetcher]] = {
        'simple': SimpleFetcher,
    }

    if fetcher_type not in fetchers:
        raise ValueError(f'Unknown fetcher type: {fetcher_type}. Choose from: {list(fetchers.keys())}')

    return fetchers[fetcher_type](**kwargs)


__all__ = ['DocumentFetcher', 'SimpleFetcher', 'create_fetcher']

"""Abstract base class for document fetchers."""

from abc import ABC, abstractmethod

from shelfscan.models.results import FetchResult


class DocumentFetcher(ABC):
    """Abstract base class for document fetchers.

    Implementations perform exactly one retrieval per call and never retry;
    retry policy belongs to whoever schedules runs.
    """

    @abstractmethod
    def fetch(self, url: str) -> FetchResult:
        """Fetch a document.

        Args:
            url: Absolute URL to fetch

        Returns:
            FetchResult holding the raw document bytes

        Raises:
            FetchError: On network failure, timeout or a non-2xx status

        """
        pass

    def close(self) -> None:
        """Release any held resources."""
        pass

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()

"""Models for fetch results, extracted product records and run outcomes."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


@dataclass
class FetchResult:
    """Result of a successful document fetch.

    Attributes:
        url: URL that was requested
        content: Raw document bytes
        status_code: HTTP status code of the response
        content_type: Value of the Content-Type header, if any
        encoding: Declared or detected text encoding, if any
        fetch_time: Total time spent fetching, in seconds

    """

    url: str
    content: bytes
    status_code: int = 200
    content_type: str | None = None
    encoding: str | None = None
    fetch_time: float = 0.0

    @property
    def size(self) -> int:
        """Size of the fetched document in bytes."""
        return len(self.content)


class ProductRecord(BaseModel):
    """One product as extracted from a supplier document, before persistence.

    Attributes:
        name: Product name, empty when not found
        price: Canonical price, or None when absent or unparsable
        promotion: Promotion text, empty when not found
        availability: Availability text, empty when not found

    """

    model_config = ConfigDict(frozen=True)

    name: str = ''
    price: Decimal | None = None
    promotion: str = ''
    availability: str = ''


class RunStatus(str, Enum):
    """Terminal status of an extraction run."""

    COMPLETED = 'completed'
    COMPLETED_WITH_WARNINGS = 'completed_with_warnings'
    FAILED = 'failed'


class ExtractionOutcome(BaseModel):
    """Records produced from one parsed document.

    Attributes:
        records: Product records in document order
        matched_count: Number of elements matched by the list selector

    """

    model_config = ConfigDict(frozen=True)

    records: tuple[ProductRecord, ...] = ()
    matched_count: int = 0


class ExtractionRun(BaseModel):
    """Outcome of one supplier run, handed to the caller read-only.

    Attributes:
        supplier_url: Source URL the run fetched
        status: Terminal status
        records: Product records in document order (empty unless the run completed)
        matched_count: Elements matched by the list selector
        fielded_count: Records successfully produced from matched elements
        reason: Operator-facing explanation for failures and warnings
        warnings: Non-fatal observations about the run
        started_at: When the run began
        duration: Wall-clock duration of the run in seconds

    """

    model_config = ConfigDict(frozen=True)

    supplier_url: str
    status: RunStatus
    records: tuple[ProductRecord, ...] = ()
    matched_count: int = 0
    fielded_count: int = 0
    reason: str | None = None
    warnings: tuple[str, ...] = ()
    started_at: datetime = Field(default_factory=datetime.now)
    duration: float = 0.0

    @property
    def success(self) -> bool:
        """True unless the run failed."""
        return self.status is not RunStatus.FAILED

    @property
    def priced_count(self) -> int:
        """Number of records carrying a price."""
        return sum(1 for record in self.records if record.price is not None)

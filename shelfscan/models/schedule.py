"""Pydantic model for a supplier's recurring capture schedule."""

from datetime import datetime, timedelta
from typing import Literal, cast

from pydantic import BaseModel, ConfigDict, Field, model_validator


class Schedule(BaseModel):
    """When a supplier should be captured.

    Attributes:
        kind: 'daily' or 'weekly'
        day: Weekday for weekly schedules (0=Monday ... 6=Sunday)
        hour: Hour of day (0-23) at which the capture becomes due

    """

    model_config = ConfigDict(frozen=True)

    kind: Literal['daily', 'weekly'] = Field(default='daily', description='Schedule type')
    day: int | None = Field(default=None, ge=0, le=6, description='Weekday for weekly schedules')
    hour: int = Field(default=0, ge=0, le=23, description='Hour of day')

    @model_validator(mode='after')
    def _check_weekly_day(self) -> 'Schedule':
        if self.kind == 'weekly' and self.day is None:
            raise ValueError('weekly schedules need a day (0=Monday ... 6=Sunday)')
        return self

    def next_run(self, after: datetime) -> datetime:
        """Return the first due time strictly after the given moment.

        Args:
            after: Reference time

        Returns:
            Datetime of the next scheduled capture

        """
        candidate = after.replace(hour=self.hour, minute=0, second=0, microsecond=0)
        if self.kind == 'daily':
            if candidate <= after:
                candidate += timedelta(days=1)
            return candidate

        day = cast(int, self.day)
        candidate += timedelta(days=(day - candidate.weekday()) % 7)
        if candidate <= after:
            candidate += timedelta(days=7)
        return candidate

    def is_due(self, last_run: datetime | None, now: datetime) -> bool:
        """Check whether a capture should happen now.

        Args:
            last_run: When the supplier was last captured, or None if never
            now: Current time

        Returns:
            True if a scheduled time has passed since last_run

        """
        if last_run is None:
            return True
        return self.next_run(last_run) <= now

"""
Base class for events passed over the DomainEventBus.
"""

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone


@dataclass(frozen=True, kw_only=True)
class DomainEvent:
    """
    Something that happened which other services may react to.

    Subclasses add their payload as positional fields; `event_id` and
    `timestamp` are keyword-only so they never get in the way.
    """

    event_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def name(self) -> str:
        """Event type name used in log lines."""
        return type(self).__name__

"""
Domain events emitted by the filesystem watcher.
"""

from dataclasses import dataclass

from share_agent.core.events.domain_event import DomainEvent
from share_agent.models import FileChangeType


@dataclass(frozen=True)
class FileChangeEvent(DomainEvent):
    """Published when an entry below a watched directory changes."""

    type: FileChangeType
    path: str  # System path

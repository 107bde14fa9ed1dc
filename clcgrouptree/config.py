"""Configuration for group hierarchy walks.

All tuning of the walk engine arrives through a WalkConfig passed to the
entry point; nothing is read from process-wide state.
"""

from dataclasses import dataclass
from typing import List, Optional


DEFAULT_GROUP_TYPE = "default"   # Tag of ordinary user folders
DEFAULT_NUM_WORKERS = 20         # Concurrent callback workers


@dataclass
class WalkConfig:
    """Tuning knobs for walk_group_hierarchy.

    Attributes:
        num_workers: Number of concurrent callback workers
        queue_size: Capacity of the producer -> worker queue; None means
            one slot per worker, 0 means unbounded. The producer blocks
            when it is full.
        default_type: Group type of ordinary folders. Every other type is
            treated as special and sorts first.
        poll_interval: How often (seconds) blocked threads re-check the
            context in the thread-based walker
    """

    num_workers: int = DEFAULT_NUM_WORKERS
    queue_size: Optional[int] = None
    default_type: str = DEFAULT_GROUP_TYPE
    poll_interval: float = 0.05

    @property
    def effective_queue_size(self) -> int:
        return self.num_workers if self.queue_size is None else self.queue_size

    @classmethod
    def serial(cls) -> 'WalkConfig':
        """Create config that runs callbacks one at a time.

        Useful when callbacks talk to a rate-limited backend.
        """
        return cls(num_workers=1)

    def validate(self) -> List[str]:
        """Validate configuration for consistency.

        Returns:
            List of validation errors (empty if valid)
        """
        errors = []

        if not isinstance(self.num_workers, int) or self.num_workers <= 0:
            errors.append("num_workers must be a positive integer")

        if self.queue_size is not None and self.queue_size < 0:
            errors.append("queue_size cannot be negative")

        if not self.default_type:
            errors.append("default_type cannot be empty")

        if self.poll_interval <= 0:
            errors.append("poll_interval must be positive")

        return errors

    def check(self) -> None:
        """Raise ValueError if the configuration is invalid."""
        errors = self.validate()
        if errors:
            raise ValueError("invalid walk configuration: " + "; ".join(errors))

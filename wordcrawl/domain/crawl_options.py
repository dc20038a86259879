from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class CrawlOptions:
    """Immutable settings for a single crawl run.

    Built once at the command-line boundary and handed to the engine;
    nothing inside the engine reads process arguments.
    """

    parallel: int = 1
    max_depth: int = 0
    limit: float = 0.0
    verbose: bool = False
    deadline: Optional[float] = None

    def __post_init__(self):
        if self.parallel < 1:
            raise ValueError("parallel must be at least 1")
        if self.max_depth < 0:
            raise ValueError("max_depth must be non-negative")
        if self.limit < 0:
            raise ValueError("limit must be non-negative")
        if self.deadline is not None and self.deadline <= 0:
            raise ValueError("deadline must be positive when set")

    def exceeds_max_depth(self, depth: int) -> bool:
        return self.max_depth < depth

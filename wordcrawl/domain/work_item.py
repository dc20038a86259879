from typing import NamedTuple


class WorkItem(NamedTuple):
    """A URL waiting on the work queue together with the depth it was found at."""
    url: str
    depth: int

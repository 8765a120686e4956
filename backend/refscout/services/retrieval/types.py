"""
Common types and constants for the retrieval workflow.
"""
from typing import Any, Awaitable, Callable, List, Optional, Union

from refscout.schemas.events import ProgressStep
from refscout.schemas.search import SelectionItem

# Type alias for progress callbacks
ProgressCallback = Callable[[ProgressStep, str, Optional[str]], None]

# Any callable mapping a selection batch to {"indices": [...]}, sync or async
SelectionOracle = Callable[[List[SelectionItem]], Union[Awaitable[Any], Any]]


def _noop_callback(step: ProgressStep, message: str, detail: Optional[str] = None):
    """Default no-op callback when none provided."""
    pass

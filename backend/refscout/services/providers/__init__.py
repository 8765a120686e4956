"""
Search providers for reference retrieval.

Each provider is implemented in its own module for maintainability.
All search methods are async for parallel execution.

To add a new provider:
1. Create a new file (e.g., new_provider.py) with a BaseProvider subclass
2. Export it here
3. Add it to build_default_providers()
"""
from typing import List, Optional

import httpx

from refscout.core.config import Settings
from .base import BaseProvider, ParseResult, find_result_list, first_field
from .bocha import BochaProvider
from .onebound import OneBoundProvider


def build_default_providers(
    settings: Settings,
    transport: Optional[httpx.AsyncBaseTransport] = None
) -> List[BaseProvider]:
    """Providers in registration order; earlier providers win URL ties."""
    return [
        BochaProvider(settings, transport=transport),
        OneBoundProvider(settings, transport=transport),
    ]


__all__ = [
    "BaseProvider",
    "ParseResult",
    "BochaProvider",
    "OneBoundProvider",
    "build_default_providers",
    "find_result_list",
    "first_field",
]

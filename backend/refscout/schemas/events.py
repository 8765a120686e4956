"""
Progress Event Schemas

Steps of a retrieval call, reported through the optional progress callback.
"""
from enum import Enum


class ProgressStep(str, Enum):
    """States a retrieval call passes through."""
    SEARCHING = "searching"
    AGGREGATED = "aggregated"
    SELECTING = "selecting"
    ENRICHING = "enriching"
    DONE = "done"

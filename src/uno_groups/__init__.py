"""uno-groups - group delimited records that share any field value."""

from uno_groups.core.record import FieldKey, Group, Record
from uno_groups.engine.config import GroupingConfig
from uno_groups.engine.pipeline import (
    GroupingError,
    GroupingPipeline,
    GroupingResult,
    GroupingStats,
)

__version__ = "1.2.0"

__all__ = [
    "FieldKey",
    "Group",
    "GroupingConfig",
    "GroupingError",
    "GroupingPipeline",
    "GroupingResult",
    "GroupingStats",
    "Record",
    "__version__",
]

"""On-disk storage for intermediate pipeline state."""

from uno_groups.storage.spool import RecordSpool

__all__ = ["RecordSpool"]

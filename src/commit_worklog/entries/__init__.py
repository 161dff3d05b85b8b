"""Log entry model and reducer exports."""

from .models import LogEntry
from .reducer import reduce_sessions, round_up_to_quarter_hour

__all__ = ["LogEntry", "reduce_sessions", "round_up_to_quarter_hour"]

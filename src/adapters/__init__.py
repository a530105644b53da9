"""Best-effort converters between the canonical model and other notations."""

from adapters.ssa import from_ssa, to_ssa
from adapters.trace import from_trace, to_trace

__all__ = ["from_ssa", "from_trace", "to_ssa", "to_trace"]

"""
Correlation ids for outgoing JSON-RPC calls.

Ids are uniform-random positive integers. Responses are never matched back
by id (each call has its own HTTP connection), so collisions are harmless;
the only hard rule is that an outgoing id never equals the incoming local id.
"""

import random
from typing import Optional

from mcp_remote.configs.constants import ID_MAX, ID_MIN
from mcp_remote.rpc.models import RequestId


class CorrelationIdGenerator:
    """Draws outgoing request ids from [low, high]."""

    def __init__(self, low: int = ID_MIN, high: int = ID_MAX, rng: Optional[random.Random] = None):
        if low < 1 or high <= low:
            raise ValueError(f"Invalid id range [{low}, {high}]")
        self.low = low
        self.high = high
        self._rng = rng or random.Random()

    def next_id(self, avoid: Optional[RequestId] = None) -> int:
        """Return a fresh id, redrawing if it equals avoid."""
        while True:
            candidate = self._rng.randint(self.low, self.high)
            if avoid is None or str(candidate) != str(avoid):
                return candidate

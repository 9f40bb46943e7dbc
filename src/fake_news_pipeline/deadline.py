"""
Request deadline propagation across stages.

The gateway starts the clock; every outbound call sends the absolute
deadline in the X-Request-Deadline header (epoch seconds) and clips its own
timeout to what is left of it. Inbound requests restore the deadline into
a context variable via the tracing middleware.

The deadline is absolute, so stage hosts must share a synchronized clock
(NTP); skew between hosts shrinks or stretches the remaining budget.
"""

import time
from contextvars import ContextVar
from typing import Optional

DEADLINE_HEADER = "X-Request-Deadline"
REQUEST_ID_HEADER = "X-Request-ID"

request_deadline: ContextVar[Optional[float]] = ContextVar("request_deadline", default=None)
request_id: ContextVar[Optional[str]] = ContextVar("request_id", default=None)


def parse_deadline(value: Optional[str]) -> Optional[float]:
    """Parse a deadline header value; invalid values are ignored."""
    if not value:
        return None
    try:
        deadline = float(value)
    except ValueError:
        return None
    return deadline if deadline > 0 else None


def remaining_timeout(default: float) -> float:
    """
    Timeout for the next outbound call.

    The configured timeout, clipped by the current request deadline.
    A non-positive result means the budget is already spent.
    """
    deadline = request_deadline.get()
    if deadline is None:
        return default
    return min(default, deadline - time.time())


def outbound_headers(timeout: float) -> dict[str, str]:
    """
    Headers propagating request id and deadline to the next stage.

    The deadline is sent as epoch seconds and read against the receiver's clock.
    """
    deadline = request_deadline.get()
    if deadline is None:
        deadline = time.time() + timeout
    headers = {DEADLINE_HEADER: f"{deadline:.3f}"}
    current_id = request_id.get()
    if current_id:
        headers[REQUEST_ID_HEADER] = current_id
    return headers

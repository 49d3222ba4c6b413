"""Fallback diagnostic channel for failures that must not reach callers.

Transport write failures are reported here instead of being raised out of
the log operation that triggered them.
"""

import sys
from typing import Any, Optional


def report_transport_error(error: Optional[BaseException], sink: Any = None) -> None:
    """Write a transport failure to ``sys.stderr``."""
    name = getattr(sink, "name", None) or type(sink).__name__
    sys.stderr.write(f"logfacade: transport {name} failed: {error!r}\n")

"""Call-site identification for log records."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from types import FrameType


@dataclass(frozen=True)
class CallSite:
    """Short identifiers of the code that issued a log call."""

    type_name: str
    method_name: str


def _short_module_name(frame: FrameType) -> str:
    module = frame.f_globals.get("__name__") or "?"
    return module.rsplit(".", 1)[-1]


def _owner_from_qualname(qualname: str) -> str | None:
    """Return the enclosing class/function name of a qualified name, if any.

    ``OrderBook.refresh`` -> ``OrderBook``; ``outer.<locals>.inner`` -> ``outer``.
    """
    parts = [p for p in qualname.split(".")[:-1] if p != "<locals>"]
    return parts[-1] if parts else None


def describe_frame(frame: FrameType) -> CallSite:
    """Build a CallSite for the code running in `frame`."""
    code = frame.f_code
    qualname = getattr(code, "co_qualname", code.co_name)
    owner = _owner_from_qualname(qualname)
    if owner is None:
        # Plain functions are tagged by their module, e.g. "worker" for "jobs.worker".
        owner = _short_module_name(frame)
    return CallSite(type_name=owner, method_name=code.co_name)


def capture_call_site(stacklevel: int) -> CallSite:
    """Describe the frame `stacklevel` levels above the caller of this function.

    `stacklevel=1` names whoever called the function that called
    `capture_call_site`. Values below 1 count as 1; a level past the
    outermost frame stops at the outermost frame, as stdlib `logging` does.
    """
    # Start from the caller of this helper.
    frame = sys._getframe(1)
    for _ in range(max(stacklevel, 1)):
        if frame.f_back is None:
            break
        frame = frame.f_back
    return describe_frame(frame)

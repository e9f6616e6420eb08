# slow_internet_detector/visibility.py
"""Home-view visibility queries.

The UI layer hands the monitor a :class:`ViewContext` describing its home
view. Asking whether that view is on screen can fail (the view may be torn
down mid-query), so the answer is a tri-state rather than a bare bool.
"""

from __future__ import annotations

from enum import Enum
from typing import Protocol, runtime_checkable


class Visibility(str, Enum):
    """Outcome of a visibility query."""

    VISIBLE = "visible"
    NOT_VISIBLE = "not_visible"
    UNKNOWN = "unknown"

    @property
    def is_visible(self) -> bool:
        return self is Visibility.VISIBLE


@runtime_checkable
class ViewContext(Protocol):
    """Handle onto a UI view.

    ``mounted`` is False once the view has been disposed; ``is_current()``
    reports whether the view is the active top-level one.
    """

    @property
    def mounted(self) -> bool: ...

    def is_current(self) -> bool: ...


def query_visibility(context: ViewContext | None) -> Visibility:
    """Determine whether ``context`` is the currently active view.

    Failures raised by the context are contained and reported as
    :attr:`Visibility.UNKNOWN`.
    """
    if context is None:
        return Visibility.NOT_VISIBLE
    try:
        if not context.mounted:
            return Visibility.NOT_VISIBLE
        return Visibility.VISIBLE if context.is_current() else Visibility.NOT_VISIBLE
    except Exception:
        return Visibility.UNKNOWN

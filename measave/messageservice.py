"""A queue of user-facing messages shown one at a time."""

from __future__ import annotations

import functools
import sys
import threading
from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable

from measave.gamesaveheader import Signal

__all__ = ["MessageType", "MessageInfo", "MessageService", "message_service"]


class MessageType(Enum):
    """The kind of a message, which decides its icon."""

    QUESTION_TWO_ACTIONS = "question-two-actions"
    QUESTION_TWO_ACTIONS_CANCEL = "question-two-actions-cancel"
    WARNING_TWO_ACTIONS = "warning-two-actions"
    WARNING_TWO_ACTIONS_CANCEL = "warning-two-actions-cancel"
    WARNING_CONTINUE_CANCEL = "warning-continue-cancel"
    INFORMATION = "information"
    ERROR = "error"

    @property
    def icon_name(self) -> str:
        """Theme icon name for this kind of message."""
        if self in (MessageType.QUESTION_TWO_ACTIONS, MessageType.QUESTION_TWO_ACTIONS_CANCEL):
            return "dialog-question"
        if self is MessageType.INFORMATION:
            return "dialog-information"
        if self is MessageType.ERROR:
            return "dialog-error"
        return "dialog-warning"


@dataclass(frozen=True)
class MessageInfo:
    """One message waiting to be shown."""

    type: MessageType
    caption: str
    text: str
    details: str = ""


Presenter = Callable[[MessageInfo], Any]


def _print_to_stderr(info: MessageInfo) -> bool:
    print(f"{info.caption}: {info.text}", file=sys.stderr)
    if info.details:
        print(info.details, file=sys.stderr)
    return False


class MessageService:
    """Shows queued messages through a presenter, one at a time.

    The presenter receives each :class:`MessageInfo`. If it returns a true
    value the message stays shown until :meth:`finish` is called; otherwise
    the next message follows at once. Without a presenter, messages are
    written to standard error.
    """

    def __init__(self, presenter: Presenter | None = None) -> None:
        self._presenter = presenter or _print_to_stderr
        self._lock = threading.RLock()
        self._queue: deque[MessageInfo] = deque()
        self._current: MessageInfo | None = None
        self._main_window: Any = None
        self.main_window_changed = Signal()

    @property
    def main_window(self) -> Any:
        """The window messages are shown over, if any."""
        with self._lock:
            return self._main_window

    @main_window.setter
    def main_window(self, window: Any) -> None:
        with self._lock:
            if self._main_window is window:
                return
            self._main_window = window
        self.main_window_changed.emit(window)

    @property
    def current(self) -> MessageInfo | None:
        """The message being shown, if any."""
        with self._lock:
            return self._current

    def pending(self) -> list[MessageInfo]:
        """Messages queued but not yet shown, oldest first."""
        with self._lock:
            return list(self._queue)

    def push_error(self, caption: str, message: str, details: str = "") -> None:
        """Queue an error message and show it when nothing else is shown."""
        self._push(MessageInfo(MessageType.ERROR, caption, message, details))

    def finish(self) -> bool:
        """Close the shown message and show the next; False if none was shown."""
        with self._lock:
            if self._current is None:
                return False
            self._current = None
        self._show_next()
        return True

    def _push(self, info: MessageInfo) -> None:
        with self._lock:
            self._queue.append(info)
        self._show_next()

    def _show_next(self) -> None:
        while True:
            with self._lock:
                if self._current is not None or not self._queue:
                    return
                info = self._queue.popleft()
                self._current = info
            if self._presenter(info):
                return
            with self._lock:
                self._current = None


@functools.lru_cache(maxsize=None)
def message_service() -> MessageService:
    """The application-wide message service."""
    return MessageService()
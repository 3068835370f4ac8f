import logging
import threading
from enum import Enum
from functools import partial
from typing import Callable, Optional

from postkit.schemas.render import CodeBlock
from postkit.settings import settings

logger = logging.getLogger(__name__)


class CopyState(str, Enum):
    IDLE = "idle"
    COPIED = "copied"


class CopyButton:
    """
    Copy affordance for a rendered code block.

    A successful copy flips the state to COPIED and schedules a revert to IDLE.
    Re-triggering or closing cancels the pending revert, and a revert from a
    superseded timer is ignored.
    """

    def __init__(
        self,
        code_text: str,
        clipboard: Callable[[str], None],
        reset_after: Optional[float] = None,
        timer_factory=threading.Timer,
    ):
        self.code_text = code_text
        self.clipboard = clipboard
        self.reset_after = (
            settings.COPY_RESET_SECONDS if reset_after is None else reset_after
        )
        self.timer_factory = timer_factory
        self._state = CopyState.IDLE
        self._timer = None
        self._generation = 0
        self._lock = threading.Lock()

    @classmethod
    def for_block(cls, block: CodeBlock, clipboard: Callable[[str], None], **kwargs):
        return cls(block.copyText, clipboard, **kwargs)

    @property
    def state(self) -> CopyState:
        return self._state

    @property
    def label(self) -> str:
        return "Copied" if self._state is CopyState.COPIED else "Copy"

    def copy(self) -> CopyState:
        try:
            self.clipboard(self.code_text)
        except Exception as e:
            # Clipboard failures stay silent for the reader
            logger.debug(f"Clipboard write failed: {e}")
            return self._state

        with self._lock:
            self._cancel_pending()
            self._state = CopyState.COPIED
            timer = self.timer_factory(
                self.reset_after, partial(self._revert, self._generation)
            )
            timer.daemon = True
            self._timer = timer
        timer.start()
        return self._state

    def close(self) -> None:
        with self._lock:
            self._cancel_pending()

    def _revert(self, generation: int) -> None:
        with self._lock:
            if generation != self._generation:
                return
            self._timer = None
            self._state = CopyState.IDLE

    def _cancel_pending(self) -> None:
        self._generation += 1
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False

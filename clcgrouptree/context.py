"""Cancellation context shared by all stages of one walk.

A Context carries a cancellation signal and an optional deadline. Contexts
form a tree: cancelling a parent cancels every context derived from it, and
a child never outlives its parent's deadline. The same object works from
threads and from asyncio code, so both walker flavours and user callbacks
can rely on it.
"""

import threading
import time
from typing import Callable, List, Optional, Set

from .errors import ContextCancelledError, DeadlineExceededError


class Context:
    """Cancellation signal with optional deadline.

    Example:
        >>> ctx = Context(timeout=5.0)
        >>> tree = walk_group_hierarchy(root, callback, context=ctx)
    """

    def __init__(
        self,
        parent: Optional['Context'] = None,
        timeout: Optional[float] = None,
        deadline: Optional[float] = None
    ):
        """Create a context.

        Args:
            parent: Context to derive from; its cancellation propagates here
            timeout: Seconds from now after which the context expires
            deadline: Absolute expiry on the time.monotonic() clock
        """
        self._parent = parent
        self._lock = threading.Lock()
        self._event = threading.Event()
        self._err: Optional[ContextCancelledError] = None
        self._callbacks: List[Callable[['Context'], None]] = []
        self._children: Set['Context'] = set()
        self._timer: Optional[threading.Timer] = None

        own_deadline = deadline
        if timeout is not None:
            expiry = time.monotonic() + timeout
            own_deadline = expiry if own_deadline is None else min(own_deadline, expiry)

        parent_deadline = parent.deadline if parent is not None else None
        if own_deadline is None:
            self._deadline = parent_deadline
        elif parent_deadline is None:
            self._deadline = own_deadline
        else:
            self._deadline = min(own_deadline, parent_deadline)

        if parent is not None:
            parent._attach(self)

        # The parent's own timer covers its deadline
        if own_deadline is not None and self._deadline == own_deadline and not self.done():
            delay = own_deadline - time.monotonic()
            if delay <= 0:
                self._cancel(DeadlineExceededError())
            else:
                self._timer = threading.Timer(delay, self._cancel, args=(DeadlineExceededError(),))
                self._timer.daemon = True
                self._timer.start()

    @property
    def deadline(self) -> Optional[float]:
        """Effective deadline on the time.monotonic() clock, or None."""
        return self._deadline

    def remaining(self) -> Optional[float]:
        """Seconds left until the deadline (never negative), or None."""
        if self._deadline is None:
            return None
        return max(0.0, self._deadline - time.monotonic())

    def cancel(self) -> None:
        """Cancel this context and everything derived from it."""
        self._cancel(ContextCancelledError())

    def done(self) -> bool:
        return self._event.is_set()

    def err(self) -> Optional[ContextCancelledError]:
        """Reason for cancellation, or None while the context is live."""
        with self._lock:
            return self._err

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Block the calling thread until the context is done.

        Returns:
            True if the context is done, False if the wait timed out
        """
        return self._event.wait(timeout)

    def raise_if_done(self) -> None:
        """Raise the cancellation reason if the context is done."""
        err = self.err()
        if err is not None:
            raise err

    def add_done_callback(self, fn: Callable[['Context'], None]) -> None:
        """Call fn(context) once the context is done.

        If the context is already done, fn runs immediately in the
        calling thread. Otherwise it runs in whichever thread cancels.
        """
        with self._lock:
            if self._err is None:
                self._callbacks.append(fn)
                return
        fn(self)

    def remove_done_callback(self, fn: Callable[['Context'], None]) -> None:
        with self._lock:
            try:
                self._callbacks.remove(fn)
            except ValueError:
                pass

    def _attach(self, child: 'Context') -> None:
        with self._lock:
            err = self._err
            if err is None:
                self._children.add(child)
                return
        child._cancel(err)

    def _detach(self, child: 'Context') -> None:
        with self._lock:
            self._children.discard(child)

    def _cancel(self, err: ContextCancelledError) -> bool:
        with self._lock:
            if self._err is not None:
                return False
            self._err = err
            callbacks, self._callbacks = self._callbacks, []
            children, self._children = list(self._children), set()
            self._event.set()
            timer, self._timer = self._timer, None

        if timer is not None:
            timer.cancel()
        for child in children:
            child._cancel(err)
        if self._parent is not None:
            self._parent._detach(self)
        for fn in callbacks:
            fn(self)
        return True

    def __enter__(self) -> 'Context':
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Release the context; derived contexts are cancelled too."""
        self.cancel()

    def __repr__(self) -> str:
        state = 'live' if self._err is None else type(self._err).__name__
        return f"Context({state}, deadline={self._deadline})"

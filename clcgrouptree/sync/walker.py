"""Parallel, cancellable processing of group trees on threads.

Same pipeline as the asyncio walker: one producer thread flattens the
tree, a fixed pool of worker threads runs the callback, and the calling
thread reassembles the processed nodes into a sorted tree.

Threads cannot be interrupted, so workers check the shared context before
every callback and blocking queue operations re-check it every
``poll_interval`` seconds. A long-running callback should watch the
context it is given if it wants to stop early.
"""

import logging
import queue
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, List, Optional

from .._common.assembly import TreeAssembler
from .._common.node import GroupNode, NodeProjection, ReassembledNode
from .._common.traversal import iter_projections
from ..config import WalkConfig
from ..context import Context
from ..errors import IncompleteWalkError, InvalidRootError

logger = logging.getLogger(__name__)

NodeCallback = Callable[[Context, NodeProjection], None]

# Queue markers
_DONE = object()
_ABORT = object()


class GroupWalker:
    """Thread-based counterpart of AsyncGroupWalker."""

    def __init__(
        self,
        callback: Optional[NodeCallback] = None,
        config: Optional[WalkConfig] = None
    ):
        self.callback = callback
        self.config = config or WalkConfig()
        self.config.check()

    def walk(self, root: GroupNode, context: Optional[Context] = None) -> ReassembledNode:
        """Walk the tree at ``root`` and return the reassembled tree.

        All worker threads have exited by the time this returns or raises.

        Raises:
            InvalidRootError: if root is None
            ContextCancelledError: if the context was cancelled or expired
            ConsistencyError: if the processed nodes do not form one tree
            Exception: the first exception raised by the callback
        """
        if root is None:
            raise InvalidRootError("group hierarchy walk requires a root group")

        ctx = Context(parent=context)
        try:
            ctx.raise_if_done()
            return self._run(root, ctx)
        finally:
            ctx.cancel()

    def _run(self, root: GroupNode, ctx: Context) -> ReassembledNode:
        num_workers = self.config.num_workers
        poll = self.config.poll_interval
        nodes: queue.Queue = queue.Queue(maxsize=self.config.effective_queue_size)
        processed: queue.Queue = queue.Queue()
        errors: List[BaseException] = []
        errors_lock = threading.Lock()
        emitted = 0
        produced_all = False

        def fail(exc: BaseException, projection: Optional[NodeProjection] = None) -> None:
            with errors_lock:
                if not errors:
                    errors.append(exc)
                    if projection is not None:
                        logger.warning("Callback failed for group %s/%s: %r",
                                       projection.name, projection.id, exc)
                    else:
                        logger.warning("Group walk failed: %r", exc)
            ctx.cancel()

        def on_context_done(_: Context) -> None:
            processed.put(_ABORT)

        def put(item) -> bool:
            """Put with backpressure; False if the context fired first."""
            while not ctx.done():
                try:
                    nodes.put(item, timeout=poll)
                    return True
                except queue.Full:
                    continue
            return False

        def produce() -> None:
            nonlocal emitted, produced_all
            try:
                for projection in iter_projections(root):
                    if not put(projection):
                        return
                    emitted += 1
                produced_all = True
                for _ in range(num_workers):
                    if not put(_DONE):
                        return
            except Exception as exc:
                fail(exc)

        def work() -> None:
            try:
                while not ctx.done():
                    try:
                        projection = nodes.get(timeout=poll)
                    except queue.Empty:
                        continue
                    if projection is _DONE or ctx.done():
                        break
                    if self.callback is not None:
                        try:
                            self.callback(ctx, projection)
                        except Exception as exc:
                            fail(exc, projection)
                            return
                        except BaseException as exc:
                            fail(exc, projection)
                            raise
                    processed.put(projection)
            finally:
                processed.put(_DONE)

        logger.debug("Walking group hierarchy at %s/%s with %d worker threads",
                     root.name, root.id, num_workers)

        executor = ThreadPoolExecutor(max_workers=num_workers + 1,
                                      thread_name_prefix="group-walk")
        ctx.add_done_callback(on_context_done)
        try:
            executor.submit(produce)
            for _ in range(num_workers):
                executor.submit(work)

            assembler = TreeAssembler(self.config.default_type)
            finished = 0
            while finished < num_workers:
                item = processed.get()
                if item is _ABORT:
                    break
                if item is _DONE:
                    finished += 1
                    continue
                assembler.add(item)

            with errors_lock:
                first_error = errors[0] if errors else None
            if first_error is not None:
                raise first_error
            ctx.raise_if_done()
            if not produced_all:
                raise IncompleteWalkError(len(assembler))

            tree = assembler.build(expected=emitted)
            logger.debug("Processed %d groups under %s", len(assembler), tree.id)
            return tree
        finally:
            ctx.remove_done_callback(on_context_done)
            ctx.cancel()
            executor.shutdown(wait=True)


def walk_group_hierarchy(
    root: GroupNode,
    callback: Optional[NodeCallback] = None,
    *,
    context: Optional[Context] = None,
    config: Optional[WalkConfig] = None
) -> ReassembledNode:
    """Convert the tree at ``root`` into a processed, sorted tree.

    Args:
        root: Root of the tree to start at
        callback: Processes a single NodeProjection in a worker thread
        context: Cancellation context; its deadline bounds the walk
        config: Walk configuration

    Returns:
        Root of the reassembled tree
    """
    return GroupWalker(callback, config).walk(root, context)

"""Parallel, cancellable processing of group trees on asyncio.

The walk runs as three stages connected by queues:

1. a producer task flattens the input tree depth-first into NodeProjections
2. a fixed pool of worker tasks applies the caller's callback to each one
3. the calling coroutine drains the processed nodes and reassembles them
   into a sorted tree

Workers finish in any order; the reassembly stage restores a deterministic
order. The first callback error cancels the shared context, which stops the
producer and cancels every other worker.
"""

import asyncio
import functools
import inspect
import logging
from typing import Awaitable, Callable, List, Optional, Union

from .._common.assembly import TreeAssembler
from .._common.node import GroupNode, NodeProjection, ReassembledNode
from .._common.traversal import iter_projections
from ..config import WalkConfig
from ..context import Context
from ..errors import IncompleteWalkError, InvalidRootError

logger = logging.getLogger(__name__)

AsyncNodeCallback = Callable[[Context, NodeProjection], Union[Awaitable[None], None]]

# Queue markers
_DONE = object()    # producer -> worker: no more nodes; worker -> consumer: worker exited
_ABORT = object()   # -> consumer: the context was cancelled


def _is_coroutine_callable(fn) -> bool:
    """True for coroutine functions, partials of them and async __call__ objects."""
    if fn is None:
        return False
    return inspect.iscoroutinefunction(fn) or inspect.iscoroutinefunction(
        getattr(fn, '__call__', None))


class AsyncGroupWalker:
    """Converts a GroupNode tree into a processed, sorted ReassembledNode tree.

    A walker can be reused; every call to walk() has its own queues, tasks
    and lookup table.
    """

    def __init__(
        self,
        callback: Optional[AsyncNodeCallback] = None,
        config: Optional[WalkConfig] = None
    ):
        """Initialize walker.

        Args:
            callback: Called as ``callback(context, projection)`` for every
                group. May be a coroutine function or a plain function, and
                may modify the projection in place. None means no-op.
                Plain functions run in the loop's default executor; a
                cancelled walk does not wait for those still running.
            config: Walk configuration (worker count, queue size, ...)
        """
        self.callback = callback
        self.config = config or WalkConfig()
        self.config.check()
        self._callback_is_async = _is_coroutine_callable(callback)

    async def walk(self, root: GroupNode, context: Optional[Context] = None) -> ReassembledNode:
        """Walk the tree at ``root`` and return the reassembled tree.

        Args:
            root: Root of the tree to start at
            context: Caller's cancellation context (optional)

        Returns:
            Root of the reassembled tree

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
            return await self._run(root, ctx)
        finally:
            ctx.cancel()

    async def _run(self, root: GroupNode, ctx: Context) -> ReassembledNode:
        loop = asyncio.get_running_loop()
        num_workers = self.config.num_workers
        nodes: asyncio.Queue = asyncio.Queue(maxsize=self.config.effective_queue_size)
        processed: asyncio.Queue = asyncio.Queue()
        tasks: List[asyncio.Task] = []
        errors: List[BaseException] = []
        emitted = 0
        produced_all = False

        def fail(exc: BaseException, projection: Optional[NodeProjection] = None) -> None:
            if not errors:
                errors.append(exc)
                if projection is not None:
                    logger.warning("Callback failed for group %s/%s: %r",
                                   projection.name, projection.id, exc)
                else:
                    logger.warning("Group walk failed: %r", exc)
            ctx.cancel()

        def abort() -> None:
            if not errors:
                errors.append(ctx.err())
            for task in tasks:
                task.cancel()
            processed.put_nowait(_ABORT)

        def on_context_done(_: Context) -> None:
            # May run in a foreign thread (timer, caller)
            try:
                loop.call_soon_threadsafe(abort)
            except RuntimeError:
                pass  # Loop already closed: this walk has finished

        async def produce() -> None:
            nonlocal emitted, produced_all
            try:
                for projection in iter_projections(root):
                    if ctx.done():
                        return
                    await nodes.put(projection)
                    emitted += 1
                produced_all = True
                for _ in range(num_workers):
                    await nodes.put(_DONE)
            except Exception as exc:
                fail(exc)

        async def call(projection: NodeProjection) -> None:
            if self._callback_is_async:
                await self.callback(ctx, projection)
                return
            # Plain functions may block, keep them off the event loop
            result = await loop.run_in_executor(
                None, functools.partial(self.callback, ctx, projection))
            if inspect.isawaitable(result):
                await result

        async def work() -> None:
            try:
                while True:
                    projection = await nodes.get()
                    if projection is _DONE or ctx.done():
                        break
                    if self.callback is not None:
                        try:
                            await call(projection)
                        except Exception as exc:
                            fail(exc, projection)
                            return
                        except BaseException as exc:
                            # Cancellation of this task after the context fired is expected
                            if not ctx.done():
                                fail(exc, projection)
                            raise
                    processed.put_nowait(projection)
            finally:
                processed.put_nowait(_DONE)

        logger.debug("Walking group hierarchy at %s/%s with %d workers",
                     root.name, root.id, num_workers)

        ctx.add_done_callback(on_context_done)
        try:
            tasks.append(loop.create_task(produce()))
            tasks.extend(loop.create_task(work()) for _ in range(num_workers))

            assembler = TreeAssembler(self.config.default_type)
            finished = 0
            while finished < num_workers:
                item = await processed.get()
                if item is _ABORT:
                    break
                if item is _DONE:
                    finished += 1
                    continue
                assembler.add(item)

            # If any of the stages failed, propagate it to the caller
            if errors:
                raise errors[0]
            ctx.raise_if_done()
            if not produced_all:
                raise IncompleteWalkError(len(assembler))

            tree = assembler.build(expected=emitted)
            logger.debug("Processed %d groups under %s", len(assembler), tree.id)
            return tree
        finally:
            ctx.remove_done_callback(on_context_done)
            ctx.cancel()
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)


async def walk_group_hierarchy(
    root: GroupNode,
    callback: Optional[AsyncNodeCallback] = None,
    *,
    context: Optional[Context] = None,
    config: Optional[WalkConfig] = None
) -> ReassembledNode:
    """Convert the tree at ``root`` into a processed, sorted tree.

    Args:
        root: Root of the tree to start at
        callback: Processes a single NodeProjection; sync or async
        context: Cancellation context; its deadline bounds the walk
        config: Walk configuration

    Returns:
        Root of the reassembled tree

    Example:
        >>> async def add_server_count(ctx, node):
        ...     node.annotations['servers'] = len(node.servers)
        >>> tree = await walk_group_hierarchy(root, add_server_count)
    """
    return await AsyncGroupWalker(callback, config).walk(root, context)

"""Bounded, order-preserving fan-out of per-chunk generation calls."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, TypeVar

import anyio
import asyncer

from .errors import ChunkGenerationError, ProviderError

if TYPE_CHECKING:
	from collections.abc import Awaitable, Callable, Sequence

logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")


async def gather_in_order(
	items: Sequence[T],
	worker: Callable[[int, T], Awaitable[R]],
	concurrency: int,
) -> list[R]:
	"""
	Run ``worker`` over every item with at most ``concurrency`` calls in flight.

	The calls share one task group: the first worker to raise cancels the
	others, including those still waiting for a slot, and its exception is
	re-raised unwrapped.

	Args:
	    items: Inputs, in order
	    worker: Coroutine function called with ``(index, item)``
	    concurrency: Maximum number of concurrent calls

	Returns:
	    Worker results in input order, regardless of completion order

	Raises:
	    ValueError: If concurrency is smaller than 1

	"""
	if concurrency < 1:
		msg = f"concurrency must be at least 1, got {concurrency}"
		raise ValueError(msg)

	semaphore = anyio.Semaphore(concurrency)

	async def run(index: int, item: T) -> R:
		async with semaphore:
			return await worker(index, item)

	try:
		async with asyncer.create_task_group() as task_group:
			soon_values = [task_group.soonify(run)(index, item) for index, item in enumerate(items)]
	except BaseExceptionGroup as group:
		if len(group.exceptions) == 1:
			raise group.exceptions[0]  # noqa: B904
		raise

	return [soon_value.value for soon_value in soon_values]


async def generate_for_chunks(
	chunks: Sequence[str],
	generate: Callable[[int, str], Awaitable[R]],
	concurrency: int,
) -> list[R]:
	"""
	Generate a partial result per chunk, skipping chunks whose call failed.

	A ``ProviderError`` for one chunk is logged as a warning and that chunk
	contributes nothing. Surviving results keep chunk order.

	Args:
	    chunks: Chunk texts, in order
	    generate: Coroutine function producing the partial result for
	        ``(index, chunk)``
	    concurrency: Maximum number of concurrent calls

	Returns:
	    Partial results of the chunks that succeeded, in chunk order

	Raises:
	    ChunkGenerationError: If no chunk succeeded

	"""

	async def attempt(index: int, chunk: str) -> list[R]:
		try:
			return [await generate(index, chunk)]
		except ProviderError as e:
			error = ChunkGenerationError(f"Chunk {index + 1}/{len(chunks)} failed: {e}", chunk_index=index)
			logger.warning("%s", error)
			return []

	outcomes = await gather_in_order(chunks, attempt, concurrency)
	results = [result for outcome in outcomes for result in outcome]
	if not results:
		msg = f"Failed to process any of the {len(chunks)} chunk(s)"
		raise ChunkGenerationError(msg)

	logger.debug("Generated partial results for %d of %d chunk(s)", len(results), len(chunks))
	return results

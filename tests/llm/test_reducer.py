"""Tests for the ordered fan-out helpers."""

from __future__ import annotations

import asyncio
import logging

import pytest

from gitvibe.config import ConfigurationError
from gitvibe.llm import ChunkGenerationError, ProviderError, gather_in_order, generate_for_chunks


@pytest.mark.unit
class TestGatherInOrder:
	"""Test gather_in_order."""

	@pytest.mark.asyncio
	async def test_results_follow_input_order(self) -> None:
		"""Later items finishing first does not reorder results."""
		items = ["a", "b", "c", "d"]

		async def worker(index: int, item: str) -> str:
			await asyncio.sleep((len(items) - index) * 0.01)
			return item.upper()

		assert await gather_in_order(items, worker, concurrency=4) == ["A", "B", "C", "D"]

	@pytest.mark.asyncio
	async def test_concurrency_is_bounded(self) -> None:
		"""No more than ``concurrency`` workers run at once."""
		active = 0
		peak = 0

		async def worker(index: int, item: int) -> int:
			nonlocal active, peak
			active += 1
			peak = max(peak, active)
			await asyncio.sleep(0.01)
			active -= 1
			return item * 2

		results = await gather_in_order(list(range(7)), worker, concurrency=2)

		assert results == [0, 2, 4, 6, 8, 10, 12]
		assert peak == 2

	@pytest.mark.asyncio
	async def test_empty(self) -> None:
		"""No items, no calls."""

		async def worker(index: int, item: str) -> str:  # noqa: ARG001
			pytest.fail("worker should not be called")

		assert await gather_in_order([], worker, concurrency=1) == []

	@pytest.mark.asyncio
	async def test_error_stops_remaining_workers(self) -> None:
		"""After a worker raises, queued workers never start."""
		started: list[int] = []

		async def worker(index: int, item: str) -> str:
			started.append(index)
			if index == 0:
				msg = "missing API key"
				raise ConfigurationError(msg)
			await asyncio.sleep(0.01)
			return item

		with pytest.raises(ConfigurationError, match="missing API key"):
			await gather_in_order([f"c{i}" for i in range(6)], worker, concurrency=1)
		await asyncio.sleep(0.05)

		assert started == [0]

	@pytest.mark.asyncio
	async def test_error_cancels_running_workers(self) -> None:
		"""Workers already in flight are cancelled when another one fails."""
		finished: list[int] = []

		async def worker(index: int, item: str) -> str:
			if index == 1:
				msg = "bug"
				raise KeyError(msg)
			await asyncio.sleep(0.05)
			finished.append(index)
			return item

		with pytest.raises(KeyError):
			await gather_in_order(["a", "b", "c"], worker, concurrency=3)
		await asyncio.sleep(0.1)

		assert finished == []

	@pytest.mark.asyncio
	async def test_invalid_concurrency(self) -> None:
		"""Concurrency below 1 is rejected."""

		async def worker(index: int, item: str) -> str:  # noqa: ARG001
			return item

		with pytest.raises(ValueError, match="concurrency"):
			await gather_in_order(["a"], worker, concurrency=0)


@pytest.mark.unit
class TestGenerateForChunks:
	"""Test generate_for_chunks."""

	@pytest.mark.asyncio
	async def test_failed_chunks_skipped(self, caplog: pytest.LogCaptureFixture) -> None:
		"""A provider failure drops that chunk and logs a warning."""

		async def generate(index: int, chunk: str) -> str:
			if index == 1:
				raise ProviderError("openai", "timeout")
			return f"summary of {chunk}"

		with caplog.at_level(logging.WARNING):
			results = await generate_for_chunks(["c0", "c1", "c2"], generate, concurrency=2)

		assert results == ["summary of c0", "summary of c2"]
		assert "Chunk 2/3 failed" in caplog.text

	@pytest.mark.asyncio
	async def test_all_failed(self) -> None:
		"""When every chunk fails there is nothing to merge."""

		async def generate(index: int, chunk: str) -> str:  # noqa: ARG001
			raise ProviderError("groq", "down")

		with pytest.raises(ChunkGenerationError, match="Failed to process any"):
			await generate_for_chunks(["c0", "c1"], generate, concurrency=2)

	@pytest.mark.asyncio
	async def test_other_errors_propagate(self) -> None:
		"""Only provider failures are recovered."""

		async def generate(index: int, chunk: str) -> str:  # noqa: ARG001
			msg = "bug"
			raise KeyError(msg)

		with pytest.raises(KeyError):
			await generate_for_chunks(["c0"], generate, concurrency=1)

"""Utility functions for commit message generation."""

from __future__ import annotations

import json
import logging
import re
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from .schemas import CommitResultsSchema, FallbackOutput, ParseOutcome, StructuredOutput

if TYPE_CHECKING:
	from collections.abc import Iterator, Sequence

logger = logging.getLogger(__name__)

_CODE_FENCE_PATTERN = re.compile(r"```(?:json|JSON)?\s*\n?(.*?)```", re.DOTALL)
_JSON_DECODER = json.JSONDecoder()


def _json_values(text: str) -> Iterator[Any]:
	"""Yield JSON values that may hold the results, most specific first."""
	stripped = text.strip()
	candidates = [stripped]
	fence = _CODE_FENCE_PATTERN.search(stripped)
	if fence:
		candidates.append(fence.group(1).strip())

	for candidate in candidates:
		try:
			value = json.loads(candidate)
		except json.JSONDecodeError as e:
			logger.debug("Candidate rejected: %s", e.__class__.__name__)
			continue
		yield value

	# Objects embedded in prose, which may itself contain braces
	start = stripped.find("{")
	while start != -1:
		try:
			value, _ = _JSON_DECODER.raw_decode(stripped, start)
		except json.JSONDecodeError:
			value = None
		if isinstance(value, dict):
			yield value
		start = stripped.find("{", start + 1)


def parse_structured_output(text: str) -> ParseOutcome:
	"""
	Parse a model response into commit message results.

	The whole response is tried first, then the body of a Markdown code fence,
	then every JSON object embedded in the text, left to right. The first value
	that validates against ``CommitResultsSchema`` wins.

	Args:
	    text: Raw model response

	Returns:
	    ``StructuredOutput`` with the results, or ``FallbackOutput`` carrying
	    the raw text when nothing could be parsed

	"""
	for value in _json_values(text):
		try:
			parsed = CommitResultsSchema.model_validate(value)
		except ValidationError:
			logger.debug("JSON value does not match the results schema")
			continue
		return StructuredOutput(results=tuple(parsed.results))

	logger.debug("No JSON results found in model output (%d chars)", len(text))
	return FallbackOutput(raw_text=text)


def outcome_results(outcome: ParseOutcome) -> list[str]:
	"""
	Turn a per-chunk parse outcome into partial results.

	Unparsable output is kept as a single result made of its stripped text,
	even when that text is empty, so every chunk that answered has a place in
	the merge.

	"""
	if isinstance(outcome, StructuredOutput):
		return list(outcome.results)
	logger.warning("Chunk output was not valid JSON, using the raw text instead")
	return [outcome.raw_text.strip()]


def format_bullets(results: Sequence[str]) -> str:
	"""Render partial results as ``- <result>`` lines, in order."""
	return "\n".join(f"- {result}" for result in results)


def clean_commit_message(message: str) -> str:
	"""
	Clean a commit message before it is shown or committed.

	Collapses runs of blank lines and trims surrounding whitespace.

	"""
	cleaned = re.sub(r"\n{3,}", "\n\n", message)
	return cleaned.strip()

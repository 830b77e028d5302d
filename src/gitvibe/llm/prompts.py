"""Prompt template rendering."""

from __future__ import annotations

from typing import TYPE_CHECKING

from gitvibe.config.prompts import (
	DEFAULT_COMMIT_PROMPT,
	DEFAULT_MERGE_COMMIT_PROMPT,
	DEFAULT_MERGE_PR_PROMPT,
	DEFAULT_PR_CHUNK_PROMPT,
	DEFAULT_PR_PROMPT,
)

if TYPE_CHECKING:
	from collections.abc import Mapping

__all__ = [
	"DEFAULT_COMMIT_PROMPT",
	"DEFAULT_MERGE_COMMIT_PROMPT",
	"DEFAULT_MERGE_PR_PROMPT",
	"DEFAULT_PR_CHUNK_PROMPT",
	"DEFAULT_PR_PROMPT",
	"render_prompt",
]


def render_prompt(template: str, variables: Mapping[str, object]) -> str:
	"""
	Substitute ``{name}`` placeholders in a template.

	Substitution is literal: every occurrence of ``{name}`` is replaced by the
	string form of its value, nothing else in the template is interpreted, and
	substituted values are not scanned again. Placeholders without a variable
	are left as they are, so templates may contain JSON with braces.

	Args:
	    template: Prompt template
	    variables: Values keyed by placeholder name

	Returns:
	    The rendered prompt

	"""
	if not variables:
		return template

	# Replace over the original template pieces so a value that contains
	# another placeholder is never expanded.
	pieces = [template]
	for key, value in variables.items():
		token = "{" + key + "}"
		replacement = str(value)
		next_pieces: list[str] = []
		for index, piece in enumerate(pieces):
			if index % 2:
				next_pieces.append(piece)
				continue
			parts = piece.split(token)
			for part_index, part in enumerate(parts):
				if part_index:
					next_pieces.append(replacement)
				next_pieces.append(part)
		pieces = next_pieces
	return "".join(pieces)

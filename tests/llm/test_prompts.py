"""Tests for prompt template rendering."""

from __future__ import annotations

import pytest

from gitvibe.llm.prompts import (
	DEFAULT_COMMIT_PROMPT,
	DEFAULT_MERGE_COMMIT_PROMPT,
	DEFAULT_MERGE_PR_PROMPT,
	DEFAULT_PR_CHUNK_PROMPT,
	DEFAULT_PR_PROMPT,
	render_prompt,
)


@pytest.mark.unit
class TestRenderPrompt:
	"""Test render_prompt."""

	def test_replaces_every_occurrence(self) -> None:
		"""All occurrences of a placeholder are substituted."""
		assert render_prompt("{x} and {x}", {"x": "1"}) == "1 and 1"

	def test_unknown_placeholders_kept(self) -> None:
		"""Placeholders without a variable stay verbatim."""
		assert render_prompt("{known} {unknown}", {"known": "k"}) == "k {unknown}"

	def test_absent_variables_ignored(self) -> None:
		"""Variables not used by the template change nothing."""
		assert render_prompt("plain", {"diff": "d"}) == "plain"

	def test_values_are_not_expanded_again(self) -> None:
		"""A value containing another placeholder is inserted literally."""
		assert render_prompt("{a} {b}", {"a": "{b}", "b": "x"}) == "{b} x"

	def test_json_braces_survive(self) -> None:
		"""Literal JSON in a template is left alone."""
		template = 'Return {"results": ["..."]} for {diff}'

		assert render_prompt(template, {"diff": "D"}) == 'Return {"results": ["..."]} for D'

	def test_non_string_values(self) -> None:
		"""Values are converted with str()."""
		assert render_prompt("n={n_commit}", {"n_commit": 3}) == "n=3"

	def test_no_variables(self) -> None:
		"""An empty mapping returns the template unchanged."""
		assert render_prompt("{diff}", {}) == "{diff}"


@pytest.mark.unit
@pytest.mark.parametrize(
	("template", "placeholders"),
	[
		(DEFAULT_COMMIT_PROMPT, ["{diff}", "{n_commit}"]),
		(DEFAULT_MERGE_COMMIT_PROMPT, ["{messages}", "{n_commit}"]),
		(DEFAULT_PR_PROMPT, ["{commits}"]),
		(DEFAULT_PR_CHUNK_PROMPT, ["{diff}"]),
		(DEFAULT_MERGE_PR_PROMPT, ["{messages}"]),
	],
)
def test_default_templates_have_placeholders(template: str, placeholders: list[str]) -> None:
	"""Each default template uses the variables its caller supplies."""
	for placeholder in placeholders:
		assert placeholder in template


@pytest.mark.unit
def test_commit_templates_describe_results_schema() -> None:
	"""Commit templates ask for the results JSON object."""
	for template in (DEFAULT_COMMIT_PROMPT, DEFAULT_MERGE_COMMIT_PROMPT):
		assert '"results"' in template
		assert '"required": ["results"]' in template

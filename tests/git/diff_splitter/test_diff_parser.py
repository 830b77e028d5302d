"""Tests for the unified diff parser."""

from __future__ import annotations

import pytest

from gitvibe.git.diff_splitter import ChangeStatus, DiffFileChange, DiffSummary, parse_diff

SAMPLE_DIFF = """\
diff --git a/src/app.py b/src/app.py
index 1234567..abcdef0 100644
--- a/src/app.py
+++ b/src/app.py
@@ -1,3 +1,4 @@
 import os
-print("old")
+print("new")
+print("more")
diff --git a/new.txt b/new.txt
new file mode 100644
index 0000000..1111111
--- /dev/null
+++ b/new.txt
@@ -0,0 +1 @@
+hello
diff --git a/gone.txt b/gone.txt
deleted file mode 100644
index 2222222..0000000
--- a/gone.txt
+++ /dev/null
@@ -1 +0,0 @@
-bye
diff --git a/logo.png b/logo.png
index 3333333..4444444 100644
Binary files a/logo.png and b/logo.png differ
"""


@pytest.mark.unit
class TestParseDiff:
	"""Test parse_diff."""

	def test_files_in_order_of_appearance(self) -> None:
		"""Every file header produces one entry, in order."""
		summary = parse_diff(SAMPLE_DIFF)

		assert summary.filenames == ["src/app.py", "new.txt", "gone.txt", "logo.png"]
		assert len(summary) == 4

	def test_counts_match_content_lines(self) -> None:
		"""Additions and deletions equal the number of +/- content lines."""
		summary = parse_diff(SAMPLE_DIFF)

		for change in summary.files:
			content_lines = change.content.splitlines()
			assert change.additions == sum(1 for line in content_lines if line.startswith("+"))
			assert change.deletions == sum(1 for line in content_lines if line.startswith("-"))

		assert summary.total_additions == 3
		assert summary.total_deletions == 2

	def test_content_keeps_changed_lines_only(self) -> None:
		"""File markers, hunk headers and context lines are not part of the content."""
		app = parse_diff(SAMPLE_DIFF).files[0]

		assert app.content == '-print("old")\n+print("new")\n+print("more")\n'
		assert app.additions == 2
		assert app.deletions == 1

	def test_status_from_mode_lines(self) -> None:
		"""new/deleted file mode lines set the status."""
		statuses = {change.filename: change.status for change in parse_diff(SAMPLE_DIFF).files}

		assert statuses == {
			"src/app.py": ChangeStatus.MODIFIED,
			"new.txt": ChangeStatus.ADDED,
			"gone.txt": ChangeStatus.DELETED,
			"logo.png": ChangeStatus.MODIFIED,
		}

	def test_binary_file_has_zero_counts(self) -> None:
		"""Binary files are emitted without counts or content."""
		logo = parse_diff(SAMPLE_DIFF).files[-1]

		assert logo == DiffFileChange(filename="logo.png")

	@pytest.mark.parametrize("text", ["", "\n\n", "just some text\n+not a diff\n"])
	def test_no_headers_gives_empty_summary(self, text: str) -> None:
		"""Input without file headers has no files."""
		assert parse_diff(text) == DiffSummary()

	def test_malformed_header_is_skipped(self) -> None:
		"""Lines after an unmatched header are ignored until the next header."""
		diff = (
			"diff --git nonsense\n"
			"+ignored\n"
			"-ignored\n"
			"diff --git a/ok.py b/ok.py\n"
			"+kept\n"
		)

		summary = parse_diff(diff)

		assert summary.filenames == ["ok.py"]
		assert summary.files[0].content == "+kept\n"

	def test_to_block(self) -> None:
		"""Blocks carry the file name and status before the content."""
		change = DiffFileChange(filename="a.py", status=ChangeStatus.ADDED, additions=1, content="+x\n")

		assert change.to_block() == "File: a.py\nStatus: added\n+x\n"

"""Git integration: diff parsing, chunking and message generation."""

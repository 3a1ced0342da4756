"""Prompt modules built on repository state and the formatter."""

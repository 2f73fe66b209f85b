"""Shared utilities (LLM access, opening files)."""

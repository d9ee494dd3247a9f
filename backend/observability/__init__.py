"""JSONL logging and timing helpers."""

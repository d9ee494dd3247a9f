"""Strict UTF-16 <-> UTF-8 converters."""

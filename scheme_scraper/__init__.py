"""Enumerate and download genotyping schemes from a browsable directory listing."""

__version__ = "1.0.0"

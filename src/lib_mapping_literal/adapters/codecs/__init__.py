"""Suffix-selected file readers and writers."""

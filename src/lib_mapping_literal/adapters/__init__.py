"""Outer-ring adapters."""

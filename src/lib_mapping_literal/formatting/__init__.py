"""Mapping-literal rendering."""

"""Pure application-layer operations: convert, filter, merge."""

"""Domain value kinds and the error taxonomy."""

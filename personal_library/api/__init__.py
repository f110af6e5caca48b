"""HTTP surface of the personal library."""

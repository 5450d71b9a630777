"""Equivalence classes and partitions of table rows for dependency mining."""

"""Boundary adapters: storage, upstream functions, provider probes, database."""

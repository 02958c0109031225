"""Core infrastructure: configuration, logging, canonical hashing, template analysis."""

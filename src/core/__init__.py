"""Configuration, parsing primitives and storage."""

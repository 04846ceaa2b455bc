"""Core encoder: models, key-value sources, serialization, and the drain."""

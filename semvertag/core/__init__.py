"""Core layer: versioning, release decisions, configuration, logging."""

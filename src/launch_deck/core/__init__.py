"""Core configuration, scoring tables and domain errors."""

"""Configuration — section models, settings sources, and logging setup."""

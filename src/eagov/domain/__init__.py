"""Domain layer — EA types, lifecycle coverage, and access control.

This layer depends only on stdlib and pydantic.
It must never import from governance, services, infrastructure, commands, or config.
"""

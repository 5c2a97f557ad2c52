"""Domain layer — the requirement tree and the traversals built on it.

This layer depends only on stdlib and pydantic.
It must never import from services, infrastructure, commands, or config.
"""

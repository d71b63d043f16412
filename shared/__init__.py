"""
Shared utilities for the Rulebook evaluation engine.

This package aggregates the ambient building blocks used by the engine:

- config: Engine settings via pydantic-settings
- logging: Structured logging with evaluation correlation
- errors: Canonical error types and responses

Do not import from rulebook into shared/.
"""

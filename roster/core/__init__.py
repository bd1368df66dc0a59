"""
Core utilities shared across the roster API.

This package hosts:
- configuration helpers (env vars, paths, storage backend selection)
- the error taxonomy raised by services and translated by the HTTP layer
- logging setup

Routers and services depend on these primitives instead of reading the
environment or building HTTP errors themselves.
"""

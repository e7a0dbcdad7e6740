"""
Core utilities shared across the stock API.

This package hosts:
- configuration helpers (env vars, data paths, backing mode)
- logging setup and password hashing
- request parsing and response envelope helpers used by the routers

Routers should depend on these primitives instead of reading the
environment or building JSON envelopes by hand.
"""

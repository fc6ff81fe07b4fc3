"""
Core utilities shared across the campus activity API.

This package hosts configuration, the error taxonomy, logging setup and the
password hashing primitives. Routers and services depend on these instead of
reading os.environ or argon2 directly.
"""

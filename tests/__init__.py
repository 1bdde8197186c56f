"""Test suite for warden.

- unit/: isolated tests with fakes (no database)
- integration/: tests against in-memory SQLite (aiosqlite) and fakeredis

No external services are needed.
"""

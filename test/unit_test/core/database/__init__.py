"""Unit tests for the database layer.

Entities and repositories run against an in-memory SQLite database created
per test by the shared ``session`` fixture.
"""

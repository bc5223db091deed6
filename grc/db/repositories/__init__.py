"""
Per-domain repository modules for database access.

Each resource module exposes get/list/create/update/delete functions over a
SQLAlchemy session; mutations take the acting user and record change logs.
"""

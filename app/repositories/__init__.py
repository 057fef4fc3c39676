"""Repositories for the API's entity collections.

Services depend on the abstract interface in ``base``; the in-memory
implementations keep each collection in a lock-guarded dict for the life of
the process.
"""

"""Services Layer — storage-backed implementations of core protocols.

Invariants:
    - Services translate storage exceptions into core/errors.py types
"""

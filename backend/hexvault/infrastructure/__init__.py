"""Infrastructure Layer — database engine and logging setup.

Invariants:
    - Infrastructure never imports domain logic beyond core/errors.py
"""

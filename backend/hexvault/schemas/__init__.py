"""Request Schemas — validated request structs built from headers.

Invariants:
    - A schema instance only exists when every guard for its route passed
"""

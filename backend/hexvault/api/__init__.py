"""API Layer — FastAPI routes, header dependencies and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - All vault endpoints answer text/plain
"""

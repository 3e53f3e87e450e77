"""Core Layer — binding model, operators and route resolution. No IO.

Invariants:
    - No module in core/ imports from services/, schemas/ or infrastructure/
    - Every entity is immutable after construction
"""

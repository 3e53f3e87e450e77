"""apibind — declarative parameter/result binding for API definitions.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)

Design Decisions:
    - Empty __init__.py: explicit imports from submodules, no star exports
"""

__version__ = "0.1.0"

"""Users CRUD API: HTTP-to-SQL adapter over a single `users` table.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)

Design Decisions:
    - Empty __init__.py: explicit imports only, no star exports
"""

"""Service Layer — stores that apply ownership checks and persist changes.

Invariants:
    - Every store receives its AsyncSession at construction (no global handle)
    - Stores never verify tokens; they compare ids against the resolved caller
"""

"""Core Layer — pure domain logic, no IO, no async, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - Embedded-list helpers never mutate their inputs (new lists, new dicts)

Design Decisions:
    - Functional core separated from imperative shell: stores load a row,
      call a pure function, write the result back
"""

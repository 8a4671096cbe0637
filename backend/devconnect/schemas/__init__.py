"""Pydantic Schemas — request bodies and response shapes for API endpoints.

Invariants:
    - Request schemas check shape only; required-field rules live in core/validation.py
    - Response schemas never expose password hashes

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""

"""Pydantic Schemas — request validation and response shapes for the API boundary.

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""

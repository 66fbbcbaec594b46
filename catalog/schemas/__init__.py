"""Pydantic Schemas — request/response validation for API endpoints.

Invariants:
    - Schemas validate at system boundary (request body, query string, API responses)
    - CategoryStatus from core/ used for enum fields
"""

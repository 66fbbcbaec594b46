"""Catalog Service Package — categories CRUD over HTTP.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""

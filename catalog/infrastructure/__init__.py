"""Infrastructure Layer — database session management, repositories and logging.

Invariants:
    - All store IO lives here; core/ never imports from this package
"""

"""Core — domain types, entity, error hierarchy and boundary protocols.

Invariants:
    - Core NEVER imports from shell (api, services, infrastructure, models)
    - No IO here; persistence is reached only through repository_protocols
"""

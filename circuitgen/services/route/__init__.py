"""Route package: geometry, quality scoring, selection and generation services.

Submodules are imported by full path; the circuit designer depends on
``geometry`` so this package does not import its services eagerly.
"""

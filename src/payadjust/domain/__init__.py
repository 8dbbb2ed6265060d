"""Domain layer — employee record, adjustment rules, and the rule registry.

This layer depends only on the stdlib.
It must never import from services, config, or composition.
"""

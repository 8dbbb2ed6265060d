"""Service layer — guarded salary adjustments returning ServiceResult.

Services may import from the domain layer.
They must never import from config or composition.
"""

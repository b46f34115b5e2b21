"""Domain Layer: value objects, error types, result values and ports.

Has no dependencies on the core or infrastructure layers.
"""

"""Core Application Layer: request signing and the per-API-family façades.

Depends only on the domain layer; concrete transports and diagnostic sinks
are injected by the caller.
"""

"""Core interfaces/abstractions.

Why:
- Defines contracts (Protocol) implemented by concrete adapters.
- Inverts dependencies: the resolver depends on abstractions, not on `subprocess`.
"""

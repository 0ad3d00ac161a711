"""Domain models and errors.

Why:
- Plain, strictly validated data structures (Pydantic v2) plus the error taxonomy.
- The domain knows nothing about subprocesses or the CLI.
"""

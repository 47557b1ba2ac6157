"""Domain models and errors.

Pure data structures (Pydantic v2) and the error taxonomy; nothing here knows
about HTTP, ZIP files or the CLI.
"""

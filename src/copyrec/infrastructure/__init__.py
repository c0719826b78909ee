"""Infrastructure layer — schema documents and record file I/O.

This layer depends on stdlib, pydantic, and the domain layer.
It must never import from services, commands, or output.
"""

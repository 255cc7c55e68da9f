"""
Shared module package.

Contains cross-cutting concerns used across bounded contexts:
- Error handler registration
- Logging configuration and the structured logger
- Script-safe serialization
"""

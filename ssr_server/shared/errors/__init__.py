"""
Shared error handling package.

Registers the central error handler on the host application so that
every unhandled request error goes through the same pipeline.
"""

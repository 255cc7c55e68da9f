"""
Domain layer package.

Contains pure logic: the error taxonomy, value objects, classification
and port interfaces. This layer has ZERO framework dependencies.
No framework imports, no IO, no side effects.
"""

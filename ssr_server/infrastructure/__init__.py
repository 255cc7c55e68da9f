"""
Infrastructure layer package.

Adapters implementing domain ports: bundler manifest access and
template rendering.
"""

"""Book List - Services Package

This package contains the HTTP layer:
- HTTP client with the shared request-dispatch helper
- Typed books REST client (JSON and form-encoded bodies)
"""

"""API package - HTTP layer (routes, dependencies, middleware)."""

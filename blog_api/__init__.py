"""Blogging backend with JWT authentication."""

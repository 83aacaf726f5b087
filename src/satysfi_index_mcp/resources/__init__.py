"""Data files shipped with the server."""

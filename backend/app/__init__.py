"""Video portfolio API."""

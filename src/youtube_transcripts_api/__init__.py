"""HTTP API for the YouTube transcript engine."""

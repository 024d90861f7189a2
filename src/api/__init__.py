"""HTTP API for YouTube AI Studio."""

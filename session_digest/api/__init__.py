"""HTTP API for Session Digest."""

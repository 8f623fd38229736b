"""Session Digest - condensed, reviewable summaries of rrweb session recordings."""

__version__ = "0.1.0"

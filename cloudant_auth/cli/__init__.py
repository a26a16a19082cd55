"""Command line interface for cloudant-auth (requires the ``cli`` extra)."""

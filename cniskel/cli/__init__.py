"""CLI module for cniskel."""

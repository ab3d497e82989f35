"""Command-line interface for cert-toolkit."""

"""Command-line client for generating secrets on a remote secrets service."""

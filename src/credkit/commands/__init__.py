"""Subcommands of the ck command line."""

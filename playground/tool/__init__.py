"""Command line tool for playground."""

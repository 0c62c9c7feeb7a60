"""Command-line tools for working with form definitions."""

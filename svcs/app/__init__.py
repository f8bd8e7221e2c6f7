"""Command-line application for SVCS."""

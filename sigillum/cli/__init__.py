"""Command line entry points for sigillum."""

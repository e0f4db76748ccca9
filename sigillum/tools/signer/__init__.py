"""Signing tools for the sigillum plugin registry."""

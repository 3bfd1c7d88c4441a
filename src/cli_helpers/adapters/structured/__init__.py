"""Adapters forwarding output to operating-system logging backends."""

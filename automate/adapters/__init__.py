"""Adapters: implementations of the outbound ports."""

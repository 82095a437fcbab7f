"""Curves, party identities, parameters, messages and round-driven parties for threshold signatures."""

__version__ = "0.1.0"

__all__ = ["curve", "errors", "party_id", "params", "message", "party", "node", "routing"]
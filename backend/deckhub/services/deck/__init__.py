"""Deck domain services: pile transitions and connection sweeping.

The store is transport-agnostic; socket handlers and the session hub call
into it, never the other way around.
"""

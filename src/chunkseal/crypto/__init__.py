"""Cryptographic primitives used by the streaming layer."""

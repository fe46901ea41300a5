"""Core helpers shared across layers."""

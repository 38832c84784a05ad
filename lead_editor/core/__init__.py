"""
Core engine: field models, normalization, change detection and room name
derivation. Everything in this package is pure and synchronous.
"""

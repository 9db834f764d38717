"""
Core numeric primitives, domain models, and the NUMERIC wire codec.

This module contains the foundational building blocks that are independent
of external systems (account decoders, databases, etc.).
"""

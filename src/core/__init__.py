"""
Core domain models, fixed-point primitives and error taxonomy.

This module contains the foundational building blocks that are independent
of external systems (chain nodes, RPC transports, wallets).
"""

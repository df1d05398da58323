"""
Core domain models, mathematical primitives, and invariants.

This module contains the foundational building blocks of the bonding curve
model that are independent of any rendering or input layer.
"""

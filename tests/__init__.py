"""
Test suite for the bonding curve model

Contains:
- tests/unit/          : Unit tests for individual modules
"""

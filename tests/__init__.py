"""
Test suite for exactcalc

Contains:
- tests/unit/          : Unit tests for individual modules
"""

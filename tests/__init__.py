"""
Test suite for formula-engine

Contains:
- tests/unit/          : Unit tests for individual modules
"""

"""
Test suite for the IRR engine

Contains:
- tests/unit/          : Unit tests for individual modules
"""

"""
Test suite for estimate-formulas

Contains:
- tests/unit/          : Unit tests for individual modules
"""

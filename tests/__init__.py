"""
Test suite for limitseries

Contains:
- tests/unit/          : Unit tests for lazy sequences, domain models and engine stages
"""

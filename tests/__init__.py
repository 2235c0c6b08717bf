"""
Test suite for core linalg

Contains:
- tests/unit/          : Unit tests for individual modules
"""

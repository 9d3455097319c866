"""
Test suite for topos

Contains:
- tests/unit/ : Unit tests for individual modules (one file per module)
"""

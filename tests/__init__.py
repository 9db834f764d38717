"""
Test suite for the NUMERIC wire codec

Contains:
- tests/unit/          : Unit tests for individual modules
"""

"""
Test suite for the signing helper core

Contains:
- tests/unit/          : Unit tests for individual modules
- tests/fixtures/      : Sample operation schema registry
"""

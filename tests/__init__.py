"""
Test suite for exactnum

Contains:
- tests/unit/          : Unit tests for limb kernels, value types, config and logging
"""

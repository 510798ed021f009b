"""
Test suite for resource-quotes

Contains:
- tests/unit/  : Unit and property tests for individual modules
- conftest.py  : Shared market snapshots and usage samples
"""

"""
Test fixtures for idiomguard.

Sample classes and modules that honour or break the checked idioms.
"""

"""
Test support utilities for handlerkit tests.

Test doubles and small domain types that don't fit as pytest fixtures but
are shared across test modules.
"""

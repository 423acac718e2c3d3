"""
Shared Kernel

This module contains base classes and utilities shared across all domain contexts:
value objects, the domain error taxonomy and its HTTP translation.
"""

"""
Shared Kernel

Value objects and entity base classes used by every booking vertical:
date ranges, time windows and money.
"""

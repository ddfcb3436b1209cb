"""
Core infrastructure: logging, settings, errors and filesystem helpers
"""

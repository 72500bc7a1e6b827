"""
Core module - settings, error taxonomy, logging setup.
"""

"""
Utilities - upload validation and transient upload storage.
"""

"""
Services - fingerprinting, verification, company repository, events.
"""

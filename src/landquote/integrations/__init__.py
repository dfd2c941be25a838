"""
External API integrations.
"""

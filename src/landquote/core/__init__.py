"""
Core estimation logic, configuration and error handling.
"""

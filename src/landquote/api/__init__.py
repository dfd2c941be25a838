"""
HTTP API for the estimation engine.
"""

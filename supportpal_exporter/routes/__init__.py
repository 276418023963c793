"""
HTTP routes
"""

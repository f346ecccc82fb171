"""
Configuration constants and runtime settings
"""

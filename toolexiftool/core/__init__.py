"""
Core exiftool wrapper, tag models and comparison
"""

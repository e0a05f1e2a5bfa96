"""
Core app tests package.
"""

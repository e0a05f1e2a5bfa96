"""
Posts app tests package.
"""

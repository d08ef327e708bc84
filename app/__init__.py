"""
Kindred Backend Application

Compatibility scoring and preference learning for the matching service.
"""

__version__ = "0.1.0"

"""
MenuLens: dining assistant session core.

Walks a user through onboarding, collects dietary preferences, and drives a
simulated live-camera menu scan that reports safe and risky menu items.
"""

__version__ = "1.0.0"
__author__ = "MenuLens Team"

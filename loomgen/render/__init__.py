"""
Drawing and video encoding of looming animations.
"""

from .animation import LoomingAnimation

__all__ = ["LoomingAnimation"]

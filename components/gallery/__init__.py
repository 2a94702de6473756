"""
Gallery Component - Image slideshow and photo grid.
"""

from .slideshow import Slide, SlideShow

__all__ = [
    'Slide',
    'SlideShow'
]

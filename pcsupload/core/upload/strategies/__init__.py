"""Upload strategies module."""
from .slicing import BaseSlicingStrategy, PcsSlicingStrategy

__all__ = [
    'BaseSlicingStrategy',
    'PcsSlicingStrategy',
]

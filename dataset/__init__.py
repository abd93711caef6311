"""
dataset/
--------
Core data layer.  Public API:

    from dataset import Dataset
    from dataset import generate_values
"""

from dataset.dataset import Dataset, generate_values

__all__ = [
    "Dataset",
    "generate_values",
]

"""Narration segmentation and refinement for research-paper videos."""

__version__ = "0.1.0"

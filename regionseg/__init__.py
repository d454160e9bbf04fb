"""Edge-guided region segmentation: Sobel edges, disjoint-set components, flood fill."""

__version__ = "1.0.0"

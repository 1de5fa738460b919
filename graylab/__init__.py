"""graylab — grayscale raster analysis: thresholding, region labeling, moments, matching."""

__version__ = "0.1.0"

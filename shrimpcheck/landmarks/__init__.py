"""
Landmark utilities.

This package defines the model-agnostic landmark types consumed by the core,
the provider interface for landmark models (e.g. MediaPipe Holistic) and the
face-oval normalizer that reduces a face mesh to a small closed contour.
"""

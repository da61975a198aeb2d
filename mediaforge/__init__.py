"""
MediaForge - script, scene image and narration generation with zip export.
"""
__version__ = "1.0.0"

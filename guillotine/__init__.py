"""Split images into sub-images along their strongest straight seams."""

__version__ = "1.0.0"

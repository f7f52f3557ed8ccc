# Filename: __init__.py
# Author: Rich Lewis @RichLewis007
# Description: Top-level package initialization for Recoverable rm.

__all__ = ["__author__", "__version__"]

__version__ = "0.2.3"
__author__ = "Rich Lewis"

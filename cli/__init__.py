"""Command-line interface for model-gen"""

__version__ = "0.1.0"

"""Huffman-coding file archiver: create, extract, list and check archives."""

__version__ = "0.1.0"
__all__ = ["__version__"]
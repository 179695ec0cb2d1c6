"""
Py-Garden: procedural island gardens from listening features.
"""

__version__ = "0.1.0"

"""
SecDownload

Time-limited signed download links for files under a protected root.
"""

__version__ = "1.0.0"

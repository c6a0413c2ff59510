"""
PDF Share - upload PDFs and hand out shareable links.
"""

__version__ = "1.0.0"

"""
Meta tags plugin for the CMS: keeps Open Graph, Twitter Card, Dublin Core
and canonical tags of tracked pages in sync with their content.
"""

__version__ = "1.0.0"

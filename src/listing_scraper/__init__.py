"""
Watch listing scraper: turns dealer listing pages into structured records.
"""

__version__ = "1.0.0"

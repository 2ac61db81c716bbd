"""p60-schedule - describe the Portfolio 60 scraping schedule."""

__version__ = "0.1.0"

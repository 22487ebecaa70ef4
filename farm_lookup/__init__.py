"""Slug resolution and typeahead search for farm equipment, buildings and locations"""

__version__ = "0.1.0"

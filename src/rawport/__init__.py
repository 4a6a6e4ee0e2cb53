"""rawport - batch camera RAW importer.

Converts camera RAW files to DNG and names the results with a
metadata-driven filename template.
"""

__version__ = "0.1.0"

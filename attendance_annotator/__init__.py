"""Friday attendance anomaly annotator.

Reads an HR attendance workbook, flags Friday lateness / early leave /
missing punches, and exports a highlighted copy.
"""

__version__ = "0.1.0"

"""Utility constants for lucc.

Pixel resolutions are in meters; areas are reported in square kilometers.
"""

from datetime import date

# MODIS 250 m product
DEFAULT_PIXEL_RESOLUTION = 250

# Default time window for sequence charts
DEFAULT_START_DATE = date(2000, 1, 1)
DEFAULT_END_DATE = date(2016, 12, 31)

SQUARE_METERS_PER_KM2 = 1000 * 1000

# -*- coding: utf-8 -*-
"""Constants used throughout the cave_converter library.

This module centralizes all constant values to ensure consistency
and avoid magic numbers scattered across the survey algorithms.
"""

# -----------------------------------------------------------------------------
# Unit Conversions
# -----------------------------------------------------------------------------

#: Number of feet in one metre
FEET_PER_METRE: float = 3.280839895

#: Number of yards in one metre
YARDS_PER_METRE: float = FEET_PER_METRE / 3.0

#: Number of grads in a full circle
GRADS_PER_CIRCLE: float = 400.0

#: Number of degrees in a full circle
DEGREES_PER_CIRCLE: float = 360.0

#: Number of minutes of arc in one degree
MINUTES_PER_DEGREE: float = 60.0

# -----------------------------------------------------------------------------
# Missing Data Indicators
# -----------------------------------------------------------------------------

#: Length of a leg whose length was never set
UNSET_LENGTH: float = -1.0

#: Compass bearing of a leg whose bearing was never set
UNSET_COMPASS: float = -1.0

#: Clino value of a leg whose clino was never set
UNSET_CLINO: float = -99.0

#: Marker written into the down value of splays consumed by LRUD generation
LRUD_SPECIAL_FLAG: float = -999.0

# -----------------------------------------------------------------------------
# LRUD Generation
# -----------------------------------------------------------------------------

#: Angular tolerance (degrees) for back-shot detection and side classification
LRUD_BEARING_TOLERANCE: float = 3.0

#: Length tolerance (metres) for back-shot detection
LRUD_LENGTH_TOLERANCE: float = 0.2

#: Splays steeper than this (degrees) are up/down candidates
LRUD_UP_DOWN_CLINO: float = 20.0

#: Splays shallower than this (degrees) are left/right candidates
LRUD_LEFT_RIGHT_MAX_CLINO: float = 70.0

# -----------------------------------------------------------------------------
# Short Names
# -----------------------------------------------------------------------------

#: Width of generated short names
SHORT_NAME_LENGTH: int = 4

#: Character used to left-pad short names
SHORT_NAME_PAD: str = " "

#: Vowels stripped on the second short name attempt
SHORT_NAME_VOWELS: str = "aeiouAEIOU"

#: Total attempts before giving up on a unique short name
SHORT_NAME_MAX_ATTEMPTS: int = 110

# -----------------------------------------------------------------------------
# Station Names
# -----------------------------------------------------------------------------

#: Separator between series path segments in a full station name
STATION_PATH_SEPARATOR: str = "."

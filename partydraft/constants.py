"""Constants and mappings for the party draft engines."""

# Gender codes as stored on players and in exported JSON
MALE = 'M'
FEMALE = 'F'
NON_BINARY = 'NB'

GENDERS = (MALE, FEMALE, NON_BINARY)

# Genders that take part in helper early/late placement
HELPER_GENDERS = (MALE, FEMALE)

GENDER_LABELS = {
    MALE: 'Male',
    FEMALE: 'Female',
    NON_BINARY: 'NonBinary',
}

# Canonical team colour order; every engine walks teams in this order
TEAM_COLORS = ('Red', 'Blue', 'Green', 'Yellow', 'Pink', 'Purple')

TEAM_HEX = {
    'Red': '#ef4444',
    'Blue': '#3b82f6',
    'Green': '#249f9c',
    'Yellow': '#eab308',
    'Pink': '#ed1b76',
    'Purple': '#a855f7',
}

# Helper placement rows, as indexes into a team's per-gender order
EARLY_HELPER_INDEX = 0
LATE_HELPER_INDEX = 2

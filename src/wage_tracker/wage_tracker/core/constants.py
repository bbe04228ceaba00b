"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

SECONDS_PER_HOUR = 3600

USER_ID_MAX_LENGTH = 64
USER_ID_COOKIE = "userId"
# ~180 days
USER_ID_COOKIE_MAX_AGE = 15552000

DEFAULT_TIMEZONE = "UTC"

# Upper bound for hourlyWage / hourlyWageOverride. Earnings for any session
# shorter than a century stay well inside a signed 64-bit BIGINT.
MAX_HOURLY_WAGE = 1_000_000_000

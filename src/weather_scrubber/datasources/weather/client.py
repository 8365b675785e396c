"""Open-Meteo archive API constants.

API docs: https://open-meteo.com/en/docs/historical-weather-api
"""

from datetime import date

OPEN_METEO_HISTORICAL = "https://archive-api.open-meteo.com/v1/archive"

# Hourly variables we request, in the order the snapshot reads them
HOURLY_VARS = [
    "temperature_2m",
    "precipitation",
    "cloud_cover",
]

HOURS_PER_DAY = 24

# The only day the scrubber covers
TARGET_DATE = date(2024, 7, 1)

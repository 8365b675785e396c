"""External data source integrations.

Each subdirectory is one data source with a consistent structure:

    datasources/{name}/
    ├── __init__.py       # Public API re-exports
    ├── client.py         # API URLs, constants
    ├── models.py         # Frozen dataclasses for parsed responses
    └── {feature}.py      # Fetch + parse functions

Fetch functions raise ``weather_scrubber.errors.FetchError`` subclasses and
never touch view state; the controller decides what the user sees.

  - weather/  Open-Meteo archive (hourly temperature, precipitation, cloud cover)
  - radar/    RainViewer past radar frames
"""

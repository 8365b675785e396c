"""Weather Scrubber - hourly weather and radar snapshots for July 1, 2024.

Architecture::

    datasources/   External APIs (Open-Meteo archive weather, RainViewer radar)
    analysis/      Pure cross-datasource logic (radar/weather time alignment)
    controller.py  Snapshot builder state machine (request tokens, view state)
    renderers/     Pure view state -> HTML (slider page, snapshot panels)
    flows/         Prefect orchestration (build a static snapshot page)
    services/      Shared utilities (HTTP client with retry)
    web.py         Interactive slider server

Data flow: slider hour -> controller -> datasources (concurrently)
-> analysis -> view state -> renderers
"""

__version__ = "0.1.0"
__author__ = "Michael Howden"

from weather_scrubber.config import Settings
from weather_scrubber.schemas import LoadState, Snapshot, ViewState

__all__ = ["LoadState", "Settings", "Snapshot", "ViewState", "__version__"]

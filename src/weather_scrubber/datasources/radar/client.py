"""RainViewer public API constants.

API docs: https://www.rainviewer.com/api/weather-maps-api.html
"""

RAINVIEWER_MAPS_API = "https://api.rainviewer.com/public/weather-maps.json"

# {size}/{z}/{x}/{y}/{color}/{smooth}_{snow}.png: one 256px world tile,
# original color scheme, smoothed, no snow mask
TILE_SUFFIX = "/256/0/0/0/1/0_0.png"

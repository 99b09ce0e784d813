from hexmap.common.config.config import config


GEOMETRY_SOURCE_PATH = config.get("GEOMETRY_SOURCE_PATH", "data/data.json")
SOURCE_CRS = config.get("SOURCE_CRS", "EPSG:3857")
WORKING_CRS = config.get("WORKING_CRS", "EPSG:4326")
SUPPORTED_CRS = ("EPSG:3857", "EPSG:4326")

# degrees added on every side of the viewport before scanning
VIEWPORT_BUFFER = config.get_float("VIEWPORT_BUFFER", 0.5)
# cache keys keep the buffered origin in tenths of a degree
CACHE_KEY_PRECISION = 10
CACHE_SIZE_WARNING = config.get_int("CACHE_SIZE_WARNING", 500)

DEBOUNCE_MS = config.get_int("DEBOUNCE_MS", 150)
SCHEDULER_TICK_MS = config.get_int("SCHEDULER_TICK_MS", 10)

MIN_ZOOM = 2
MAX_ZOOM = 18
DEFAULT_ZOOM = 8
DEFAULT_RESOLUTION = 6
ZOOM_TO_RESOLUTION = {
    2: 1,
    3: 2,
    4: 2,
    5: 3,
    6: 3,
    7: 4,
    8: 4,
    9: 5,
    10: 5,
    11: 6,
    12: 6,
    13: 7,
    14: 8,
    15: 9,
    16: 10,
    17: 11,
    18: 12,
}

COLOR_PROPERTIES = (config.get("COLOR_PROPERTY", "COLOR_HEX"), "color")
DEFAULT_COLOR = "#cccccc"

UPDATE_SCHEDULED_MESSAGE = config.get("UPDATE_SCHEDULED_MESSAGE", "Update scheduled")

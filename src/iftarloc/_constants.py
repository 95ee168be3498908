"""Internal constants shared across the library."""

PHOTON_URL = "https://photon.komoot.io/api/"
NOMINATIM_REVERSE_URL = "https://nominatim.openstreetmap.org/reverse"

# Nominatim usage policy requires an identifying User-Agent.
USER_AGENT = "IftarInUAE/1.0 (https://iftarinuae.com)"
ACCEPT_LANGUAGE = "en"

# UAE bounding box (min_lon, min_lat, max_lon, max_lat) used to bias Photon.
UAE_BBOX: tuple[float, float, float, float] = (51.5, 22.6, 56.4, 26.1)

SEARCH_LIMIT = 5
DEBOUNCE_DELAY_S = 0.3
MIN_QUERY_LENGTH = 2
MAX_ADDRESS_LENGTH = 300
REQUEST_TIMEOUT_S = 10.0

GPS_TIMEOUT_S = 10.0
GPS_MAXIMUM_AGE_S = 0.0

UNKNOWN_LOCATION = "Unknown location"

# ------------------------------------------------------------------
# User-facing messages
# ------------------------------------------------------------------

MSG_GEOLOCATION_UNSUPPORTED = "Geolocation is not supported by this device."
MSG_PERMISSION_DENIED = "Location permission denied. Please enable it in your device settings."
MSG_POSITION_UNAVAILABLE = "Location unavailable. Please try again."
MSG_POSITION_TIMEOUT = "Location request timed out. Please try again."
MSG_POSITION_GENERIC = "An error occurred getting your location."
MSG_ADDRESS_FAILED = "Failed to get address. Please try again."


def format_bbox(bbox: tuple[float, float, float, float]) -> str:
    """Render a bounding box as Photon's ``bbox`` query value."""
    return ",".join(f"{value:g}" for value in bbox)

from typing import Final


TVMAZE_BASE_URL: Final[str] = "https://api.tvmaze.com"
NETWORK_SCHEDULE_PATH: Final[str] = "/schedule"
WEB_SCHEDULE_PATH: Final[str] = "/schedule/web"

DEFAULT_COUNTRY: Final[str] = "US"
HTTP_TIMEOUT_SECONDS: Final[float] = 15.0

UNKNOWN_NETWORK: Final[str] = "Unknown"
UNKNOWN_SHOW: Final[str] = "Unknown Show"
UNKNOWN_TYPE: Final[str] = "Unknown"
NO_AIRTIME: Final[str] = "N/A"

# Streaming platforms and networks watchable in the US regardless of the
# country TVMaze attaches to them. Matched by substring after normalization.
US_AVAILABLE_PLATFORMS: Final[tuple[str, ...]] = (
    "Netflix",
    "Paramount+",
    "Paramount Plus",
    "Paramount",
    "Hulu",
    "Prime Video",
    "Apple TV+",
    "Apple TV Plus",
    "Disney+",
    "Disney Plus",
    "Max",
    "Peacock",
    "CBS",
    "Paramount Network",
)

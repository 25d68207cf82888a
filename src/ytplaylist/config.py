"""Configuration and environment settings."""

import os
from dotenv import load_dotenv

load_dotenv()

# Remote endpoints
YOUTUBE_HOST = os.getenv("YTPLAYLIST_HOST", "https://www.youtube.com").rstrip("/")
PLAYLIST_PATH = "/playlist"
API_PATH = "/youtubei/v1/browse"

# Locale sent with every request
DEFAULT_GL = os.getenv("YTPLAYLIST_GL", "US")
DEFAULT_HL = os.getenv("YTPLAYLIST_HL", "en")

# HTTP Settings
REQUEST_TIMEOUT = float(os.getenv("YTPLAYLIST_TIMEOUT", "30"))
USER_AGENT = os.getenv(
    "YTPLAYLIST_USER_AGENT",
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
)

# travelflow/api/config.py
"""Configuration management for the travel planner API."""
import os
from dotenv import load_dotenv

load_dotenv()

GEMINI_API_URL = "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent"


def get_gemini_api_key():
    """Get Gemini API key from environment (empty string when unset)."""
    return os.getenv("GEMINI_API_KEY", "").strip()


def get_gemini_config():
    """Get Gemini model and generation configuration."""
    return {
        "model": os.getenv("GEMINI_MODEL", "gemini-1.5-flash"),
        "timeout": float(os.getenv("GEMINI_TIMEOUT_SECONDS", "60")),
        "generation": {
            "temperature": float(os.getenv("GEMINI_TEMPERATURE", "0.7")),
            "topK": int(os.getenv("GEMINI_TOP_K", "40")),
            "topP": float(os.getenv("GEMINI_TOP_P", "0.95")),
            "maxOutputTokens": int(os.getenv("GEMINI_MAX_OUTPUT_TOKENS", "8192")),
        },
        # Conversational edits send the whole plan back, so they get a
        # smaller reply budget.
        "revision_max_output_tokens": int(os.getenv("GEMINI_REVISION_MAX_OUTPUT_TOKENS", "4096")),
    }


def get_google_maps_config():
    """Get Google Maps configuration."""
    return {
        "api_key": os.getenv("GOOGLE_MAPS_API_KEY", "").strip(),
        "travel_mode": os.getenv("GOOGLE_MAPS_TRAVEL_MODE", "walking"),
    }


def get_geocode_delay():
    """Seconds to wait between sequential geocoding requests."""
    return float(os.getenv("GEOCODE_DELAY_SECONDS", "0.1"))


def get_storage_path():
    """Location of the JSON key-value store."""
    return os.getenv("TRAVELFLOW_STORAGE_PATH", os.path.join(os.getcwd(), "travelflow_data.json"))


def get_port():
    """Get port configuration."""
    return int(os.getenv("PORT", 5000))

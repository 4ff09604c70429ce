"""
Runtime configuration for RPP Copilot.

Values come from environment variables (optionally via a .env file). The
default Gemini credential can also come from Google Secret Manager on GCP.
"""
import os

from rpp_copilot.config.gcp_settings import get_secret, is_gcp_environment

# --- Model Configuration ---
LLM_MODEL = os.getenv("LLM_MODEL", "gemini-2.5-flash")
LLM_TEMPERATURE = float(os.getenv("LLM_TEMPERATURE", "0.7"))

# --- Default Credential ---
# Consulted only when the user's settings select the "default" mode.
# API_KEY is accepted as an alias for older deployments.
GOOGLE_API_KEY = get_secret("GOOGLE_API_KEY") or os.getenv("API_KEY")

# --- Assessment Configuration ---
DEFAULT_KKTP = int(os.getenv("DEFAULT_KKTP", "75"))
NEARLY_ACHIEVED_BAND_WIDTH = int(os.getenv("NEARLY_ACHIEVED_BAND_WIDTH", "10"))

# --- Rendering Configuration ---
# "passthrough" keeps stray bullet lines as paragraphs, "normalize" numbers them
BULLET_POLICY = os.getenv("BULLET_POLICY", "passthrough").lower()

# TrueType faces for PDF text; unset means DejaVu Sans if installed, else
# the Vera faces bundled with reportlab
PDF_FONT_PATH = os.getenv("PDF_FONT_PATH")
PDF_BOLD_FONT_PATH = os.getenv("PDF_BOLD_FONT_PATH")

# --- Storage Configuration ---
# Credential settings live in each visitor's browser (localStorage). Without a
# fixed secret, values saved before a restart can no longer be decrypted.
BROWSER_STORAGE_KEY = os.getenv("BROWSER_STORAGE_KEY", "rpp_copilot_settings")
BROWSER_STATE_SECRET = os.getenv("BROWSER_STATE_SECRET")

if is_gcp_environment():
    EXPORT_DIR = os.getenv("EXPORT_DIR", "/tmp/exports")
else:
    EXPORT_DIR = os.getenv("EXPORT_DIR", "exports")

# --- Server Configuration ---
GRADIO_SERVER_NAME = os.getenv("GRADIO_SERVER_NAME", "0.0.0.0")
GRADIO_SERVER_PORT = int(os.getenv("GRADIO_SERVER_PORT", "7860"))

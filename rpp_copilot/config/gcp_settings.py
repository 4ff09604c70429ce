"""
GCP-aware configuration with Secret Manager support.
Falls back to environment variables for local development.

- Local development: uses environment variables (.env file)
- GCP production: uses Google Secret Manager for the default Gemini key
- Environment variables always override secrets
"""
import os
import logging
from typing import Optional

from dotenv import load_dotenv

# Must run before any os.getenv() call below
load_dotenv()

logger = logging.getLogger(__name__)


def is_gcp_environment() -> bool:
    """Check if running on GCP."""
    return (
        os.getenv("GAE_ENV") is not None or  # App Engine
        os.getenv("K_SERVICE") is not None or  # Cloud Run
        os.getenv("GOOGLE_CLOUD_PROJECT") is not None  # Any GCP service
    )


def get_secret(secret_id: str, project_id: Optional[str] = None) -> Optional[str]:
    """
    Get a secret from the environment (local) or Google Secret Manager (GCP).

    Priority:
    1. Environment variable
    2. Secret Manager (only on GCP)
    3. None

    Args:
        secret_id: Secret name in Secret Manager or env var name
        project_id: GCP project ID (auto-detected if None)

    Returns:
        Secret value or None if not found
    """
    env_value = os.getenv(secret_id)
    if env_value:
        return env_value

    if not is_gcp_environment():
        return None

    try:
        from google.cloud import secretmanager
    except ImportError:
        # google-cloud-secret-manager not installed (local dev)
        return None

    project_id = project_id or os.getenv("GOOGLE_CLOUD_PROJECT")
    if not project_id:
        logger.warning(f"GOOGLE_CLOUD_PROJECT not set, cannot fetch secret {secret_id}")
        return None

    try:
        client = secretmanager.SecretManagerServiceClient()
        name = f"projects/{project_id}/secrets/{secret_id}/versions/latest"
        response = client.access_secret_version(request={"name": name})
        logger.info(f"Loaded secret {secret_id} from Secret Manager")
        return response.payload.data.decode("UTF-8")
    except Exception as e:
        # Secret not found or permission denied
        logger.warning(f"Could not fetch secret {secret_id} from Secret Manager: {e}")
        return None


def mask_secret(value: Optional[str]) -> str:
    """Return a log-safe prefix of a credential."""
    if not value:
        return "(not set)"
    return value[:6] + "..." if len(value) >= 6 else "(short key)"

"""
Top-level coordinator for a lesson-plan session.

Owns the (plan, error, busy) triple. Generation requests are tagged with a
monotonically increasing sequence number; a response whose number is no
longer the latest is discarded instead of overwriting newer state.
"""

import logging
import uuid
from typing import Optional

from pydantic import BaseModel

from rpp_copilot.config import settings as config
from rpp_copilot.core.errors import CredentialMissing, IncompleteForm, RppError
from rpp_copilot.core.form import FormInput
from rpp_copilot.core.generation_client import GenerationClient
from rpp_copilot.core.schemas import GeneratedPlan
from rpp_copilot.storage.settings_store import SaveResult, Settings, SettingsStore

logger = logging.getLogger(__name__)

CUSTOM_KEY_MISSING_MESSAGE = "API Key kustom belum diisi. Harap simpan API Key di halaman Pengaturan."
DEFAULT_KEY_MISSING_MESSAGE = (
    "Kunci API bawaan tidak dikonfigurasi. Atur variabel lingkungan GOOGLE_API_KEY "
    "atau gunakan API Key kustom di halaman Pengaturan."
)
BUSY_MESSAGE = "RPP sedang dibuat. Tunggu hingga proses selesai."


class SubmitOutcome(BaseModel):
    """Result of one submit call as seen by the UI."""
    sequence: int
    stale: bool = False
    rejected: bool = False
    plan: Optional[GeneratedPlan] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.plan is not None


class PlanCoordinator:
    """
    Coordinates settings, generation and result state for one session.

    Args:
        settings_store: Injected persistence for the credential settings
        client: Generation client (a stub in tests)
        default_api_key: Deployment-supplied credential for "default" mode
    """

    def __init__(
        self,
        settings_store: SettingsStore,
        client: Optional[GenerationClient] = None,
        default_api_key: Optional[str] = None,
    ):
        self.session_id = uuid.uuid4().hex
        self.settings_store = settings_store
        self.client = client or GenerationClient()
        self.default_api_key = default_api_key if default_api_key is not None else config.GOOGLE_API_KEY
        self.settings: Settings = Settings()

        self.plan: Optional[GeneratedPlan] = None
        self.form: Optional[FormInput] = None
        self.error: Optional[str] = None
        self.busy = False
        self._sequence = 0

    # --- Settings ---

    def load_settings(self) -> Settings:
        self.settings = self.settings_store.load()
        return self.settings

    def save_settings(self, settings: Settings) -> SaveResult:
        result = self.settings_store.save(settings)
        if result.success:
            self.settings = settings
        return result

    def resolve_credential(self) -> str:
        """
        Pick the credential for the current settings mode.

        Raises:
            CredentialMissing: the selected mode has no usable credential
        """
        if self.settings.mode == "custom":
            if not self.settings.key.strip():
                raise CredentialMissing(CUSTOM_KEY_MISSING_MESSAGE)
            return self.settings.key.strip()

        if not self.default_api_key:
            raise CredentialMissing(DEFAULT_KEY_MISSING_MESSAGE)
        return self.default_api_key

    # --- Generation ---

    @property
    def latest_sequence(self) -> int:
        return self._sequence

    def reset(self) -> None:
        """Clear the result and invalidate any request still in flight."""
        self._sequence += 1
        self.plan = None
        self.form = None
        self.error = None
        self.busy = False

    async def submit(self, form: FormInput) -> SubmitOutcome:
        """
        Generate a plan for `form`, recovering every RppError into a message.

        A plan is either fully stored or not at all; an error clears any
        previous plan. While a request is in flight further submits are
        rejected without touching state.
        """
        if self.busy:
            logger.warning(f"Rejecting submit while request #{self._sequence} is in flight")
            return SubmitOutcome(sequence=self._sequence, rejected=True, error=BUSY_MESSAGE)

        missing = form.missing_fields()
        if missing:
            return self._finish(self._sequence, form, None, IncompleteForm(missing).message)

        self._sequence += 1
        sequence = self._sequence
        self.busy = True
        self.error = None
        self.plan = None

        plan: Optional[GeneratedPlan] = None
        error: Optional[str] = None
        try:
            api_key = self.resolve_credential()
            logger.info(f"Generating RPP #{sequence} for '{form.subject}' / '{form.topic_theme}'")
            plan = await self.client.generate(form, api_key)
        except RppError as e:
            logger.warning(f"Generation #{sequence} failed: {type(e).__name__}: {e.message}")
            error = e.message

        if sequence != self._sequence:
            logger.warning(f"Discarding stale response #{sequence} (latest is #{self._sequence})")
            return SubmitOutcome(sequence=sequence, stale=True)

        return self._finish(sequence, form, plan, error)

    def _finish(
        self,
        sequence: int,
        form: FormInput,
        plan: Optional[GeneratedPlan],
        error: Optional[str],
    ) -> SubmitOutcome:
        self.busy = False
        self.plan = plan
        self.form = form if plan is not None else None
        self.error = error
        return SubmitOutcome(sequence=sequence, plan=plan, error=error)

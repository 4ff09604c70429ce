"""
Gemini client for lesson-plan generation.

One request per call, constrained to the lesson-plan response schema. No
automatic retries: failures surface to the user, who may resubmit.
"""

import json
import logging
import time
from typing import Callable, Optional

from langchain_core.language_models import BaseChatModel
from langchain_core.messages import HumanMessage

from rpp_copilot.config import settings as config
from rpp_copilot.config.gcp_settings import mask_secret
from rpp_copilot.core.errors import CredentialMissing, ParseError, ServiceError
from rpp_copilot.core.form import FormInput
from rpp_copilot.core.llm_utils import extract_content_as_string, strip_code_fences
from rpp_copilot.core.prompts import build_prompt
from rpp_copilot.core.schemas import GeneratedPlan, build_response_schema, validate_plan

logger = logging.getLogger(__name__)

CREDENTIAL_MISSING_MESSAGE = "API Key tidak tersedia. Harap konfigurasikan di halaman Pengaturan."
SERVICE_ERROR_PREFIX = "Gagal menghasilkan RPP: "
PARSE_ERROR_MESSAGE = "Gagal mem-parsing respons dari AI. Coba lagi."

LLMFactory = Callable[[str], BaseChatModel]


def create_llm(api_key: str) -> BaseChatModel:
    """Create a Gemini chat model constrained to JSON lesson-plan output."""
    from langchain_google_genai import ChatGoogleGenerativeAI

    logger.info(f"Using Google Gemini API: {config.LLM_MODEL} (key {mask_secret(api_key)})")
    return ChatGoogleGenerativeAI(
        model=config.LLM_MODEL,
        temperature=config.LLM_TEMPERATURE,
        google_api_key=api_key,
        response_mime_type="application/json",
        response_schema=build_response_schema(),
    )


class GenerationClient:
    """
    Turns a form into a validated GeneratedPlan via one Gemini call.

    Error mapping:
    - empty credential -> CredentialMissing (no model is created)
    - any failure creating or calling the model -> ServiceError
    - response text that is not JSON -> ParseError
    - JSON that breaks the contract -> ValidationError
    """

    def __init__(self, llm_factory: Optional[LLMFactory] = None):
        self.llm_factory = llm_factory or create_llm

    async def generate(self, form: FormInput, api_key: str) -> GeneratedPlan:
        if not api_key or not api_key.strip():
            raise CredentialMissing(CREDENTIAL_MISSING_MESSAGE)

        prompt = build_prompt(form)
        started = time.monotonic()

        try:
            llm = self.llm_factory(api_key.strip())
            response = await llm.ainvoke([HumanMessage(content=prompt)])
        except Exception as e:
            logger.error(f"Error generating RPP with Gemini: {e}")
            raise ServiceError(f"{SERVICE_ERROR_PREFIX}{e}") from e

        logger.info(f"Gemini responded in {time.monotonic() - started:.1f}s")
        text = strip_code_fences(extract_content_as_string(response))

        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            logger.warning(f"Unparseable response ({len(text)} chars): {e}")
            raise ParseError(PARSE_ERROR_MESSAGE) from e

        return validate_plan(data)

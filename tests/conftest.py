"""Shared test fixtures."""
import json

import pytest
from unittest.mock import AsyncMock

from statement_intake.config import Settings
from statement_intake.llm.base import LLMClient, LLMResponse
from statement_intake.prompts.registry import PromptRegistry
from tests.factories import make_banking_payload, make_pdf_bytes


@pytest.fixture
def mock_settings():
    """Create test settings with dummy values."""
    return Settings(
        openai_api_key="test-openai-key",
        extraction_model="gpt-4o",
        dpi=72,
        max_pages=5,
        json_logs=True,
    )


@pytest.fixture
def banking_payload():
    return make_banking_payload()


@pytest.fixture
def mock_llm_client(banking_payload):
    """Create a mock LLM client answering with a valid banking payload."""
    client = AsyncMock(spec=LLMClient)
    client.get_model_name.return_value = "mock-model"
    response = LLMResponse(
        content=json.dumps(banking_payload),
        model="mock-model",
        input_tokens=1200,
        output_tokens=300,
    )
    client.complete_vision.return_value = response
    client.complete_text.return_value = response
    return client


@pytest.fixture
def prompt_registry():
    return PromptRegistry()


@pytest.fixture(scope="session")
def pdf_bytes():
    return make_pdf_bytes(pages=2)

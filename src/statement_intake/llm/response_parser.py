"""Parse banking data out of LLM responses."""
from __future__ import annotations
import json
import re

from pydantic import ValidationError

from ..models.banking import BankingData

_FENCED_BLOCK = re.compile(r'```(?:json)?\s*\n(.*?)\n\s*```', re.DOTALL)


def _loads_object(candidate: str) -> dict | None:
    try:
        value = json.loads(candidate)
    except json.JSONDecodeError:
        return None
    return value if isinstance(value, dict) else None


def extract_json_from_response(text: str) -> dict:
    """Extract a JSON object from LLM response text.

    Tried in order: the whole text, a fenced ```json block, then the span
    from the first ``{`` to the last ``}``.
    """
    text = text.strip()

    candidates = [text]
    fenced = _FENCED_BLOCK.search(text)
    if fenced:
        candidates.append(fenced.group(1))
    first_brace, last_brace = text.find('{'), text.rfind('}')
    if first_brace != -1 and last_brace > first_brace:
        candidates.append(text[first_brace:last_brace + 1])

    for candidate in candidates:
        parsed = _loads_object(candidate)
        if parsed is not None:
            return parsed

    raise ValueError(f"Could not extract JSON from response: {text[:200]}...")


def parse_banking_data(text: str) -> BankingData:
    """Extract and validate a ``BankingData`` record from model output.

    Raises ``ValueError`` when no JSON object is found or it does not match
    the banking data schema.
    """
    payload = extract_json_from_response(text)
    try:
        return BankingData.model_validate(payload)
    except ValidationError as exc:
        raise ValueError(f"Response does not match banking data schema: {exc.error_count()} errors") from exc

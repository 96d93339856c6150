"""
AI helpers backed by the Gemini generateContent endpoint.

Everything here degrades instead of raising: a transport error, an HTTP error
or a malformed payload becomes a None result plus a status message.

DEMO NOTICE:
analyze_password sends the password to a third-party service.
"""

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import requests

from smartvault import config

logger = logging.getLogger(__name__)


SEARCH_TERMS_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "search_terms": {
            "type": "ARRAY",
            "items": {"type": "STRING"}
        }
    }
}

PASSWORD_ANALYSIS_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "score": {"type": "NUMBER"},
        "suggestions": {
            "type": "ARRAY",
            "items": {"type": "STRING"}
        }
    },
    "required": ["score", "suggestions"]
}

SEARCH_PROMPT = """Extract website or service names from the following user query. Return the result as a JSON array. If no related websites are found, return an empty array.
User query: "{query}"
Example:
{{ "search_terms": ["Facebook", "Instagram", "Twitter"] }}"""

ANALYSIS_PROMPT = """Analyze the security strength of the following password. Provide a score from 1-100 and a list of 3 actionable suggestions to improve it in a JSON format.
Password: "{password}"
Example:
{{ "score": 85, "suggestions": ["Use a longer password.", "Include special characters.", "Avoid using common words or phrases."] }}"""


class GeminiClient:
    """Thin request/response wrapper around generateContent."""

    def __init__(self, api_key: Optional[str] = None, url: Optional[str] = None,
                 timeout: Optional[float] = None):
        self.api_key = config.GEMINI_API_KEY if api_key is None else api_key
        self.url = url or config.GEMINI_API_URL
        self.timeout = timeout or config.AI_REQUEST_TIMEOUT_SECONDS

    def call(self, prompt: str, schema: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """
        Send a prompt and parse the structured JSON answer.

        Args:
            prompt: Natural-language prompt
            schema: Gemini responseSchema describing the expected JSON

        Returns:
            The parsed JSON object, or None on any failure
        """
        payload = {
            "contents": [{"parts": [{"text": prompt}]}],
            "generationConfig": {
                "responseMimeType": "application/json",
                "responseSchema": schema
            }
        }

        try:
            response = requests.post(
                self.url,
                params={"key": self.api_key},
                json=payload,
                headers={"Content-Type": "application/json"},
                timeout=self.timeout
            )
            response.raise_for_status()
            result = response.json()
        except requests.RequestException as e:
            logger.error(f"Gemini API request failed: {e}")
            return None
        except ValueError as e:
            logger.error(f"Gemini API returned a non-JSON body: {e}")
            return None

        try:
            text = result["candidates"][0]["content"]["parts"][0]["text"]
        except (KeyError, IndexError, TypeError):
            logger.error("Gemini API: No candidates found or incomplete response.")
            return None

        try:
            parsed = json.loads(text)
        except (TypeError, ValueError) as e:
            logger.error(f"Gemini API: candidate text is not JSON: {e}")
            return None

        if not isinstance(parsed, dict):
            logger.error(f"Gemini API: expected a JSON object, got {type(parsed).__name__}")
            return None
        return parsed


@dataclass
class QueryExpansion:
    """Outcome of a smart search: the term to use and a message for the user."""
    term: str
    message: str
    sites: List[str] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        return bool(self.sites)


@dataclass
class PasswordAnalysis:
    """Outcome of a password strength check."""
    message: str
    score: Optional[int] = None
    suggestions: List[str] = field(default_factory=list)


def _string_list(value: Any) -> Optional[List[str]]:
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        return None
    return value


def expand_query(term: str, client: GeminiClient) -> QueryExpansion:
    """
    Ask the model which site names a free-text query refers to.

    On success the returned term is the site names joined by single spaces.
    On any failure the original term comes back unchanged.
    """
    if not term:
        return QueryExpansion(term=term, message=config.MSG_SEARCH_EMPTY)

    result = client.call(SEARCH_PROMPT.format(query=term), SEARCH_TERMS_SCHEMA)
    sites = _string_list(result.get("search_terms")) if result else None

    if not sites:
        if result is not None and sites is None:
            logger.warning(f"Smart search payload did not match schema: {result!r}")
        return QueryExpansion(term=term, message=config.MSG_SEARCH_NONE)

    logger.info(f"Smart search expanded query to {len(sites)} site names")
    return QueryExpansion(
        term=" ".join(sites),
        message=config.MSG_SEARCH_FOUND.format(sites=", ".join(sites)),
        sites=sites
    )


def analyze_password(password: str, client: GeminiClient) -> PasswordAnalysis:
    """Score a password from 1 to 100 and collect improvement suggestions."""
    result = client.call(ANALYSIS_PROMPT.format(password=password), PASSWORD_ANALYSIS_SCHEMA)
    if not result:
        return PasswordAnalysis(message=config.MSG_ANALYZE_FAILED)

    score = result.get("score")
    suggestions = _string_list(result.get("suggestions"))
    if isinstance(score, bool) or not isinstance(score, (int, float)) or not score or suggestions is None:
        logger.warning("Password analysis payload did not match schema")
        return PasswordAnalysis(message=config.MSG_ANALYZE_FAILED)

    score = int(round(min(max(score, config.AI_SCORE_MIN), config.AI_SCORE_MAX)))
    return PasswordAnalysis(
        message=config.MSG_ANALYZE_RESULT.format(score=score, suggestions=" ".join(suggestions)),
        score=score,
        suggestions=suggestions
    )

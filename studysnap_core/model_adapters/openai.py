"""OpenAI-compatible chat completions client."""

import asyncio
import json
from typing import Any

import httpx
from pydantic import ValidationError

from studysnap_core.config import MAX_CARD_COUNT, MIN_CARD_COUNT, Settings
from studysnap_core.errors import (
    GenerationAPIError,
    InvalidInputError,
    MissingCredentialsError,
    ResponseParseError,
)
from studysnap_core.model_adapters.base import BaseGenerationClient
from studysnap_core.schemas.cards import Flashcard
from studysnap_core.utils.cancellation import CancellationToken, ensure_token
from studysnap_core.utils.logging import get_logger

logger = get_logger(__name__)

DEFAULT_BASE_URL = "https://api.openai.com/v1"

# Default timeout for API calls (seconds)
DEFAULT_TIMEOUT = 120.0

FLASHCARD_TEMPERATURE = 0.7
FLASHCARD_MAX_TOKENS = 2500
SUMMARY_TEMPERATURE = 0.5
SUMMARY_MAX_TOKENS = 2000

FLASHCARD_SYSTEM_PROMPT = """You are a flashcard generation assistant. Create educational flashcards from the provided text.
Generate EXACTLY {count} flashcards, no more and no less.
Each flashcard has a clear question (front) and a concise answer (back).
Focus on key concepts, definitions, and important facts from the material.

Respond ONLY with a valid JSON array containing exactly {count} flashcards in this format:
[
  {{"front": "Question 1", "back": "Answer 1"}},
  {{"front": "Question 2", "back": "Answer 2"}}
]

Do not include any other text, explanations, or markdown formatting."""

FLASHCARD_USER_PROMPT = """Create exactly {count} flashcards from the following content:

{text}"""

SUMMARY_SYSTEM_PROMPT = """You are a study notes assistant. Turn raw notes or text into clean, organized study notes.

Guidelines:
- Use clear headings and bullet points
- Preserve key definitions, formulas, dates, and important facts
- Remove fluff, redundancy, and filler content
- Keep the summary concise but comprehensive
- Maintain the original meaning and context

Respond with the study notes only. No explanations or meta-commentary."""

SUMMARY_USER_PROMPT = """Summarize the following text into organized study notes:

{text}"""


def _strip_code_fence(content: str) -> str:
    """Remove a Markdown code fence wrapped around model output.

    Args:
        content: Raw message content

    Returns:
        Content without a leading ```/```json marker or trailing ``` marker
    """
    content = content.strip()
    if content.startswith("```json"):
        content = content[len("```json") :]
    elif content.startswith("```"):
        content = content[3:]
    if content.endswith("```"):
        content = content[:-3]
    return content.strip()


def _extract_message_content(body: str) -> str:
    """Pull the first choice's message content out of a completion response.

    Args:
        body: Raw HTTP response body

    Returns:
        Message content, empty if the model returned none

    Raises:
        ResponseParseError: If the body is not a chat completion payload
    """
    try:
        data = json.loads(body)
    except json.JSONDecodeError as e:
        logger.error(f"Failed to parse API response: {e}. Body: {body[:200]}...")
        raise ResponseParseError(f"API response is not valid JSON: {e}", body) from e

    try:
        content = data["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError) as e:
        raise ResponseParseError(
            "API response has no choices[0].message.content", body[:500]
        ) from e

    if content is None:
        return ""
    if not isinstance(content, str):
        raise ResponseParseError("Message content is not text", str(content)[:500])
    return content


def _parse_flashcards(content: str) -> list[Flashcard]:
    """Parse the model's JSON array of cards, dropping malformed entries.

    Args:
        content: Message content, optionally fenced

    Returns:
        Cards with non-empty front and back

    Raises:
        ResponseParseError: If the content is not a JSON array of cards
    """
    if not content or not content.strip():
        logger.warning("Empty response content received")
        return []

    inner = _strip_code_fence(content)
    try:
        data = json.loads(inner)
    except json.JSONDecodeError as e:
        logger.error(f"Failed to parse flashcard JSON: {e}. Content: {inner[:200]}...")
        raise ResponseParseError(f"Flashcard content is not valid JSON: {e}", inner) from e

    if isinstance(data, dict):
        data = data.get("cards", data.get("flashcards"))
    if not isinstance(data, list):
        raise ResponseParseError("Flashcard content is not a JSON array", inner[:500])

    cards: list[Flashcard] = []
    for index, item in enumerate(data):
        if not isinstance(item, dict):
            logger.debug(f"Dropping card {index}: not an object")
            continue
        try:
            cards.append(Flashcard(front=item.get("front"), back=item.get("back")))
        except ValidationError:
            logger.debug(f"Dropping card {index}: missing front or back")

    dropped = len(data) - len(cards)
    if dropped:
        logger.info(f"Dropped {dropped} malformed card(s) of {len(data)}")
    return cards


class OpenAIChatClient(BaseGenerationClient):
    """Client for the OpenAI chat completions endpoint over plain HTTP."""

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        basic_model: str = "gpt-4o-mini",
        advanced_model: str = "gpt-4o",
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize the client.

        Args:
            base_url: API base URL, without the /chat/completions path
            basic_model: Model used when the advanced tier is off
            advanced_model: Model used when the advanced tier is on
            timeout: Request timeout in seconds
            transport: Optional httpx transport (for testing)
        """
        self.base_url = base_url.rstrip("/")
        self.basic_model = basic_model
        self.advanced_model = advanced_model
        self.timeout = timeout
        self._transport = transport

        self._client: httpx.AsyncClient | None = None
        logger.info(
            f"Initialized OpenAI chat client (basic={basic_model}, advanced={advanced_model})"
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "OpenAIChatClient":
        return cls(
            base_url=settings.api_base_url,
            basic_model=settings.basic_model,
            advanced_model=settings.advanced_model,
            timeout=settings.request_timeout,
        )

    @property
    def client(self) -> httpx.AsyncClient:
        """Lazy-load the HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self.timeout,
                transport=self._transport,
            )
        return self._client

    def model_for(self, use_advanced_tier: bool) -> str:
        return self.advanced_model if use_advanced_tier else self.basic_model

    async def _complete(
        self,
        api_key: str,
        payload: dict[str, Any],
        operation_name: str,
        token: CancellationToken,
    ) -> str:
        """POST one chat completion request and return the message content.

        Args:
            api_key: Bearer credential
            payload: Request body
            operation_name: Name for logging
            token: Cancellation handle, checked around the network call

        Returns:
            Message content string
        """
        token.raise_if_cancelled()
        logger.debug(f"Starting {operation_name} with model {payload['model']}")

        try:
            response = await asyncio.wait_for(
                self.client.post(
                    f"{self.base_url}/chat/completions",
                    json=payload,
                    headers={"Authorization": f"Bearer {api_key}"},
                ),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError as e:
            logger.error(f"{operation_name} timed out after {self.timeout}s")
            raise GenerationAPIError(
                None, "", f"{operation_name} timed out after {self.timeout}s"
            ) from e
        except httpx.HTTPError as e:
            logger.error(f"{operation_name} request failed: {e}")
            raise GenerationAPIError(
                None, str(e), f"{operation_name} request failed: {e}"
            ) from e

        token.raise_if_cancelled()

        if not response.is_success:
            logger.error(f"{operation_name} failed with HTTP {response.status_code}")
            raise GenerationAPIError(response.status_code, response.text)

        logger.debug(f"Completed {operation_name}")
        return _extract_message_content(response.text)

    async def generate_flashcards(
        self,
        api_key: str,
        topic_text: str,
        use_advanced_tier: bool,
        requested_count: int,
        cancel_token: CancellationToken | None = None,
    ) -> list[Flashcard]:
        """Generate flashcards from text."""
        if not api_key or not api_key.strip():
            raise MissingCredentialsError("API key is required.")
        if not topic_text or not topic_text.strip():
            raise InvalidInputError("Topic text is required.")
        if not MIN_CARD_COUNT <= requested_count <= MAX_CARD_COUNT:
            raise InvalidInputError(
                f"Requested count must be between {MIN_CARD_COUNT} and {MAX_CARD_COUNT}."
            )

        token = ensure_token(cancel_token)
        logger.info(
            f"Generating {requested_count} cards from {len(topic_text)} characters"
        )

        payload = {
            "model": self.model_for(use_advanced_tier),
            "messages": [
                {
                    "role": "system",
                    "content": FLASHCARD_SYSTEM_PROMPT.format(count=requested_count),
                },
                {
                    "role": "user",
                    "content": FLASHCARD_USER_PROMPT.format(
                        count=requested_count, text=topic_text
                    ),
                },
            ],
            "temperature": FLASHCARD_TEMPERATURE,
            "max_tokens": FLASHCARD_MAX_TOKENS,
        }

        content = await self._complete(
            api_key, payload, operation_name="generate_flashcards", token=token
        )
        cards = _parse_flashcards(content)
        logger.info(f"Generated {len(cards)} cards")
        return cards

    async def summarize_to_notes(
        self,
        api_key: str,
        chunk_text: str,
        use_advanced_tier: bool,
        cancel_token: CancellationToken | None = None,
    ) -> str:
        """Condense text into study notes."""
        if not api_key or not api_key.strip():
            raise MissingCredentialsError("API key is required.")
        if not chunk_text or not chunk_text.strip():
            return ""

        token = ensure_token(cancel_token)
        logger.info(f"Summarizing {len(chunk_text)} characters")

        payload = {
            "model": self.model_for(use_advanced_tier),
            "messages": [
                {"role": "system", "content": SUMMARY_SYSTEM_PROMPT},
                {
                    "role": "user",
                    "content": SUMMARY_USER_PROMPT.format(text=chunk_text),
                },
            ],
            "temperature": SUMMARY_TEMPERATURE,
            "max_tokens": SUMMARY_MAX_TOKENS,
        }

        content = await self._complete(
            api_key, payload, operation_name="summarize_to_notes", token=token
        )
        return content.strip()

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None
            logger.debug("Closed OpenAI chat HTTP client")

    async def __aenter__(self) -> "OpenAIChatClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

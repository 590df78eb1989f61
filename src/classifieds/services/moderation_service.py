# moderation_service.py
"""
Client for the moderation oracle: an OpenAI-compatible chat-completions
endpoint that scores listing text and images.

Every call returns a ``ModerationVerdict``. Transport errors, timeouts,
non-2xx responses, malformed JSON and a missing API key all produce a
fail-closed verdict (not approved, confidence 0) so the caller can carry on
and leave the listing for manual review.
"""

import json
import math
from dataclasses import dataclass
from decimal import Decimal
from typing import Any

import requests
from django.conf import settings

from classifieds.exceptions import ModerationOracleError
from classifieds.models.choices import VerdictCategory
from classifiedsutils.logging import get_logger

logger = get_logger(__name__)

TEXT_ORACLE_LABEL = "API"
IMAGE_ORACLE_LABEL = "Image moderation API"

TEXT_SYSTEM_PROMPT = (
    "You are an expert content moderator for a classified ads platform. "
    "Always respond with valid JSON."
)

TEXT_PROMPT_TEMPLATE = """
You are a content moderation AI for a classified ads platform. Analyze the following listing and determine if it should be approved or flagged for manual review.

Title: {title}
Description: {description}
Category: {category}
Price: {price}

Check for:
1. Inappropriate or offensive content
2. Spam or duplicate content indicators
3. Scam indicators (unrealistic prices, urgent language, poor grammar)
4. Prohibited items (weapons, drugs, adult content, etc.)
5. Misleading information
6. Category mismatch

Respond with JSON in this format:
{{
  "approved": boolean,
  "confidence": number (0-1),
  "reasons": ["reason1", "reason2"],
  "category": "content_quality" | "spam" | "scam" | "prohibited" | "appropriate"
}}
"""

IMAGE_SYSTEM_PROMPT = (
    "You are an image moderation AI for a classified ads platform. "
    "Check if the image is appropriate for a general audience marketplace."
)

IMAGE_PROMPT = (
    "Analyze this image for a classified ads platform. Check for inappropriate "
    "content, adult material, violence, or any content that would be unsuitable "
    'for a general marketplace. Respond with JSON: {"approved": boolean, '
    '"confidence": number, "reasons": ["reason1"], '
    '"category": "appropriate|inappropriate"}'
)


@dataclass(frozen=True)
class ModerationVerdict:
    """Structured oracle output for one piece of content."""

    approved: bool
    confidence: float
    reasons: tuple[str, ...] = ()
    category: str = VerdictCategory.UNKNOWN.value

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "ModerationVerdict":
        """
        Build a verdict from the oracle's JSON object.

        ``confidence`` is clamped to [0, 1] (unparseable values become 0),
        non-list ``reasons`` become empty and a missing ``category`` becomes
        "unknown".
        """
        try:
            confidence = float(payload.get("confidence") or 0)
        except (TypeError, ValueError):
            confidence = 0.0
        if math.isnan(confidence):
            confidence = 0.0

        reasons = payload.get("reasons")
        return cls(
            approved=bool(payload.get("approved")),
            confidence=max(0.0, min(1.0, confidence)),
            reasons=tuple(str(reason) for reason in reasons)
            if isinstance(reasons, list)
            else (),
            category=str(payload.get("category") or VerdictCategory.UNKNOWN.value),
        )

    @classmethod
    def failed(cls, source_label: str) -> "ModerationVerdict":
        """Fail-closed verdict used whenever the oracle cannot answer."""
        return cls(
            approved=False,
            confidence=0.0,
            reasons=(f"{source_label} error - requires manual review",),
            category=VerdictCategory.ERROR.value,
        )

    @classmethod
    def neutral(cls) -> "ModerationVerdict":
        """Verdict contributed by a submission without images."""
        return cls(
            approved=True,
            confidence=1.0,
            reasons=(),
            category=VerdictCategory.APPROPRIATE.value,
        )

    def passes(self, threshold: float) -> bool:
        return self.approved and self.confidence > threshold

    def as_dict(self) -> dict[str, Any]:
        return {
            "approved": self.approved,
            "confidence": self.confidence,
            "reasons": list(self.reasons),
            "category": self.category,
        }


@dataclass(frozen=True)
class ImageAbsent:
    """The submission carried no images."""

    @property
    def verdict(self) -> ModerationVerdict:
        return ModerationVerdict.neutral()


@dataclass(frozen=True)
class ImagePresent:
    """The lead image was sent to the oracle."""

    verdict: ModerationVerdict


ImageModeration = ImageAbsent | ImagePresent


class ModerationService:
    """
    Moderation oracle client.

    Configuration comes from settings (OPENAI_API_KEY, OPENAI_API_BASE,
    OPENAI_MODERATION_MODEL, MODERATION_TIMEOUT_SECONDS) unless overridden
    in the constructor.
    """

    def __init__(
        self,
        api_key: str | None = None,
        api_base: str | None = None,
        model: str | None = None,
        timeout: float | None = None,
    ):
        self.api_key = (
            api_key if api_key is not None else getattr(settings, "OPENAI_API_KEY", "")
        )
        self.api_base = (
            api_base
            or getattr(settings, "OPENAI_API_BASE", "https://api.openai.com/v1")
        ).rstrip("/")
        self.model = model or getattr(settings, "OPENAI_MODERATION_MODEL", "gpt-5")
        self.timeout = timeout or getattr(settings, "MODERATION_TIMEOUT_SECONDS", 15)

    def moderate_text(
        self,
        title: str,
        description: str,
        category_label: str,
        price: Decimal | float | None = None,
    ) -> ModerationVerdict:
        """Score a listing's text content."""
        prompt = TEXT_PROMPT_TEMPLATE.format(
            title=title,
            description=description,
            category=category_label,
            price=f"{price} PLN" if price else "Not specified",
        )
        messages = [
            {"role": "system", "content": TEXT_SYSTEM_PROMPT},
            {"role": "user", "content": prompt},
        ]

        try:
            payload = self._complete(messages)
        except ModerationOracleError as e:
            logger.warning(
                "moderation_oracle_failed", source="text", error=str(e)
            )
            return ModerationVerdict.failed(TEXT_ORACLE_LABEL)

        verdict = ModerationVerdict.from_payload(payload)
        logger.info(
            "text_moderated",
            approved=verdict.approved,
            confidence=verdict.confidence,
            category=verdict.category,
        )
        return verdict

    def moderate_image(
        self, base64_image: str, mime_type: str = "image/jpeg"
    ) -> ModerationVerdict:
        """Score a single base64-encoded image."""
        messages = [
            {"role": "system", "content": IMAGE_SYSTEM_PROMPT},
            {
                "role": "user",
                "content": [
                    {"type": "text", "text": IMAGE_PROMPT},
                    {
                        "type": "image_url",
                        "image_url": {"url": f"data:{mime_type};base64,{base64_image}"},
                    },
                ],
            },
        ]

        try:
            payload = self._complete(messages, max_completion_tokens=500)
        except ModerationOracleError as e:
            logger.warning(
                "moderation_oracle_failed", source="image", error=str(e)
            )
            return ModerationVerdict.failed(IMAGE_ORACLE_LABEL)

        verdict = ModerationVerdict.from_payload(payload)
        logger.info(
            "image_moderated",
            approved=verdict.approved,
            confidence=verdict.confidence,
            category=verdict.category,
        )
        return verdict

    def _complete(self, messages: list[dict], **options: Any) -> dict[str, Any]:
        """POST a chat completion and return the decoded JSON object."""
        if not self.api_key:
            raise ModerationOracleError("OPENAI_API_KEY is not configured")

        try:
            response = requests.post(
                f"{self.api_base}/chat/completions",
                headers={
                    "Authorization": f"Bearer {self.api_key}",
                    "Content-Type": "application/json",
                },
                json={
                    "model": self.model,
                    "messages": messages,
                    "response_format": {"type": "json_object"},
                    **options,
                },
                timeout=self.timeout,
            )
            response.raise_for_status()
            content = response.json()["choices"][0]["message"]["content"]
            payload = json.loads(content or "{}")
        except requests.RequestException as e:
            raise ModerationOracleError(f"Oracle request failed: {e}") from e
        except (KeyError, IndexError, TypeError, ValueError) as e:
            raise ModerationOracleError(f"Malformed oracle response: {e}") from e

        if not isinstance(payload, dict):
            raise ModerationOracleError("Oracle response is not a JSON object")
        return payload

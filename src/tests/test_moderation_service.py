"""
Unit tests for the moderation oracle client.

The HTTP call is patched; no request leaves the test process.
"""

from unittest.mock import MagicMock

import pytest
import requests

from classifieds.services.moderation_service import (
    ImageAbsent,
    ImagePresent,
    ModerationService,
    ModerationVerdict,
)


@pytest.mark.unit
class TestModerationVerdict:
    def test_from_payload(self):
        verdict = ModerationVerdict.from_payload(
            {
                "approved": True,
                "confidence": 0.9,
                "reasons": ["clean"],
                "category": "appropriate",
            }
        )
        assert verdict.approved is True
        assert verdict.confidence == 0.9
        assert verdict.reasons == ("clean",)
        assert verdict.category == "appropriate"

    def test_confidence_is_clamped(self):
        assert ModerationVerdict.from_payload({"confidence": 7}).confidence == 1.0
        assert ModerationVerdict.from_payload({"confidence": -2}).confidence == 0.0

    def test_bad_fields_are_coerced(self):
        verdict = ModerationVerdict.from_payload(
            {"confidence": "high", "reasons": "spam"}
        )
        assert verdict.approved is False
        assert verdict.confidence == 0.0
        assert verdict.reasons == ()
        assert verdict.category == "unknown"

    def test_failed_verdict(self):
        verdict = ModerationVerdict.failed("API")
        assert verdict.approved is False
        assert verdict.confidence == 0.0
        assert verdict.reasons == ("API error - requires manual review",)
        assert verdict.category == "error"

    def test_passes_is_strict(self):
        verdict = ModerationVerdict(approved=True, confidence=0.8)
        assert not verdict.passes(0.8)
        assert ModerationVerdict(approved=True, confidence=0.81).passes(0.8)
        assert not ModerationVerdict(approved=False, confidence=0.99).passes(0.8)

    def test_image_absent_is_neutral(self):
        verdict = ImageAbsent().verdict
        assert verdict.approved is True
        assert verdict.confidence == 1.0

    def test_image_present_carries_verdict(self):
        verdict = ModerationVerdict(approved=False, confidence=0.3)
        assert ImagePresent(verdict).verdict is verdict


@pytest.mark.unit
class TestModerationService:
    def test_moderate_text(self, mock_oracle):
        verdict = ModerationService().moderate_text(
            "Bike", "A sturdy city bike.", "Motoryzacja", "150.00"
        )

        assert verdict.approved is True
        assert verdict.confidence == 0.95

        _, kwargs = mock_oracle.call_args
        body = kwargs["json"]
        assert body["response_format"] == {"type": "json_object"}
        prompt = body["messages"][1]["content"]
        assert "Title: Bike" in prompt
        assert "Price: 150.00 PLN" in prompt
        assert kwargs["headers"]["Authorization"] == "Bearer test-key"

    def test_moderate_text_without_price(self, mock_oracle):
        ModerationService().moderate_text("Bike", "desc", "Motoryzacja", None)

        prompt = mock_oracle.call_args.kwargs["json"]["messages"][1]["content"]
        assert "Price: Not specified" in prompt

    def test_moderate_image_sends_data_url(self, mock_oracle):
        ModerationService().moderate_image("aGVsbG8=", "image/png")

        body = mock_oracle.call_args.kwargs["json"]
        image_part = body["messages"][1]["content"][1]
        assert image_part["image_url"]["url"] == "data:image/png;base64,aGVsbG8="
        assert body["max_completion_tokens"] == 500

    def test_timeout_fails_closed(self, mock_oracle):
        mock_oracle.side_effect = requests.Timeout("timed out")

        verdict = ModerationService().moderate_text("Bike", "desc", "Motoryzacja")

        assert verdict.approved is False
        assert verdict.confidence == 0.0
        assert "requires manual review" in verdict.reasons[0]

    def test_http_error_fails_closed(self, mock_oracle):
        response = MagicMock()
        response.raise_for_status.side_effect = requests.HTTPError("500")
        mock_oracle.return_value = response

        verdict = ModerationService().moderate_image("aGVsbG8=")

        assert verdict == ModerationVerdict.failed("Image moderation API")

    def test_malformed_content_fails_closed(self, mock_oracle):
        response = MagicMock()
        response.raise_for_status.return_value = None
        response.json.return_value = {"choices": [{"message": {"content": "not json"}}]}
        mock_oracle.return_value = response

        verdict = ModerationService().moderate_text("Bike", "desc", "Motoryzacja")

        assert verdict.approved is False
        assert verdict.category == "error"

    def test_missing_api_key_skips_request(self, mock_oracle):
        verdict = ModerationService(api_key="").moderate_text("Bike", "desc", "Motoryzacja")

        assert verdict.approved is False
        mock_oracle.assert_not_called()

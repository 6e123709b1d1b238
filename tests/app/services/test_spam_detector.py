"""Testes do SpamDetector."""

from __future__ import annotations

from typing import Any

import pytest

from app.domain import parse_application_payload
from app.services.spam_detector import SpamDetector
from utils.errors import SpamRejectedError


@pytest.fixture
def detector() -> SpamDetector:
    return SpamDetector()


class TestSpamDetector:
    """Heurísticas de spam."""

    def test_clean_payload(self, detector: SpamDetector, founder_payload: dict[str, Any]) -> None:
        result = detector.check(parse_application_payload(founder_payload))
        assert result.is_spam is False
        assert result.reasons == ()

    def test_honeypot(self, detector: SpamDetector, investor_payload: dict[str, Any]) -> None:
        raw = {**investor_payload, "websiteHoneypot": "http://spam.example"}
        result = detector.check(parse_application_payload(raw))
        assert result.is_spam is True
        assert "honeypot_filled" in result.reasons

    @pytest.mark.parametrize(
        "text",
        [
            "<a href='x'>cheap</a>",
            "[url=http://x.example]deal[/url]",
            "&#60;script&#62;",
            "javascript:void(0)",
        ],
    )
    def test_markup_in_free_text(
        self, detector: SpamDetector, founder_payload: dict[str, Any], text: str
    ) -> None:
        result = detector.check(parse_application_payload({**founder_payload, "problem": text}))
        assert result.is_spam is True
        assert "markup_in_problem" in result.reasons

    def test_excessive_links(self, detector: SpamDetector, founder_payload: dict[str, Any]) -> None:
        text = " ".join(f"https://site{i}.example.com" for i in range(4))
        result = detector.check(parse_application_payload({**founder_payload, "keyHighlights": text}))
        assert "excessive_links_in_key_highlights" in result.reasons

    def test_three_links_are_tolerated(self, detector: SpamDetector, founder_payload: dict[str, Any]) -> None:
        text = " ".join(f"https://site{i}.example.com" for i in range(3))
        result = detector.check(parse_application_payload({**founder_payload, "keyHighlights": text}))
        assert result.is_spam is False

    def test_repetitive_content(self, detector: SpamDetector, founder_payload: dict[str, Any]) -> None:
        text = "buy now " * 8
        result = detector.check(parse_application_payload({**founder_payload, "solution": text}))
        assert "repetitive_content_in_solution" in result.reasons

    def test_reasons_accumulate(self, detector: SpamDetector, investor_payload: dict[str, Any]) -> None:
        raw = {
            **investor_payload,
            "websiteHoneypot": "x",
            "referralSource": "<b>friend</b>",
        }
        result = detector.check(parse_application_payload(raw))
        assert result.reasons == ("honeypot_filled", "markup_in_referral_source")

    def test_url_fields_are_not_inspected(
        self, detector: SpamDetector, founder_payload: dict[str, Any]
    ) -> None:
        raw = {**founder_payload, "website": "javascript:alert(1)"}
        assert detector.check(parse_application_payload(raw)).is_spam is False


class TestRawHoneypot:
    """Honeypot checado no dict bruto, antes do parse."""

    @pytest.mark.parametrize("key", ["websiteHoneypot", "website_honeypot"])
    def test_either_key_is_spam(self, detector: SpamDetector, key: str) -> None:
        result = detector.check_raw({"applicationKind": "founder", key: "filled"})
        assert result.is_spam is True
        assert result.reasons == ("honeypot_filled",)

    @pytest.mark.parametrize("value", [1, 0, ["x"]])
    def test_non_string_values_are_coerced(self, detector: SpamDetector, value: object) -> None:
        assert detector.check_raw({"websiteHoneypot": value}).is_spam is True

    @pytest.mark.parametrize("value", [None, "", "   "])
    def test_empty_values_are_clean(self, detector: SpamDetector, value: object) -> None:
        assert detector.check_raw({"websiteHoneypot": value}).is_spam is False

    def test_raw_check_ignores_other_fields(
        self, detector: SpamDetector, founder_payload: dict[str, Any]
    ) -> None:
        raw = {**founder_payload, "problem": "<script>x</script>"}
        assert detector.check_raw(raw).is_spam is False


class TestEnsureNotSpam:
    """ensure_not_spam levanta SpamRejectedError com os motivos."""

    def test_raw_payload(self, detector: SpamDetector) -> None:
        with pytest.raises(SpamRejectedError) as exc_info:
            detector.ensure_not_spam({"websiteHoneypot": 1, "areasOfInterest": 42})
        assert exc_info.value.reasons == ("honeypot_filled",)

    def test_typed_payload(self, detector: SpamDetector, founder_payload: dict[str, Any]) -> None:
        payload = parse_application_payload({**founder_payload, "problem": "<b>buy</b>"})
        with pytest.raises(SpamRejectedError) as exc_info:
            detector.ensure_not_spam(payload)
        assert exc_info.value.reasons == ("markup_in_problem",)

    def test_clean_payload_passes(self, detector: SpamDetector, founder_payload: dict[str, Any]) -> None:
        detector.ensure_not_spam(founder_payload)
        detector.ensure_not_spam(parse_application_payload(founder_payload))

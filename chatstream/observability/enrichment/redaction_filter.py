from __future__ import annotations

from dataclasses import dataclass
from typing import List
import re


@dataclass
class RedactionConfig:
    # # Configuration flags and replacement token for redaction
    replacement: str = "[REDACTED]"
    redact_email: bool = True
    redact_phone: bool = True
    redact_ip: bool = True
    redact_credit_card: bool = True
    redact_iban: bool = True
    preview_chars: int = 200


class RedactionFilter:
    # # Pattern based redaction of user text before it reaches logs or LLMObs
    def __init__(self, config: RedactionConfig | None = None) -> None:
        self._config = config or RedactionConfig()
        self._compile_patterns()

    def _compile_patterns(self) -> None:
        # # Order matters: card numbers before the looser phone pattern
        patterns: List[re.Pattern[str]] = []

        if self._config.redact_email:
            patterns.append(
                re.compile(r"[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}")
            )
        if self._config.redact_credit_card:
            patterns.append(
                re.compile(r"\b(?:\d[ -]*?){13,19}\b")
            )
        if self._config.redact_iban:
            patterns.append(
                re.compile(r"\b[A-Z]{2}\d{2}[A-Z0-9]{10,30}\b")
            )
        if self._config.redact_ip:
            patterns.append(
                re.compile(r"\b\d{1,3}(?:\.\d{1,3}){3}\b")
            )
        if self._config.redact_phone:
            patterns.append(
                re.compile(r"\+?\d[\d\-\s]{6,}\d")
            )

        self._patterns = patterns

    def redact_text(self, text: str) -> str:
        # # Redact sensitive patterns from plain text
        redacted = text
        for pattern in self._patterns:
            redacted = pattern.sub(self._config.replacement, redacted)
        return redacted

    def redact_preview(self, text: str | None) -> str:
        # # Redacted and truncated view of user text for log payloads
        if not text:
            return ""
        redacted = self.redact_text(text)
        limit = self._config.preview_chars
        if len(redacted) > limit:
            return redacted[:limit] + "..."
        return redacted


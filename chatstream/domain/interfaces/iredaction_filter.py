# Redacts sensitive user text before it is logged
from typing import Protocol, Optional

class IRedactionFilter(Protocol):
    # Redacted, truncated preview of a single text
    def redact_preview(self, text: Optional[str]) -> str:
        ...

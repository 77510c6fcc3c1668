"""Per-call inputs a builder may not derive from the payload: randomness and the clock."""
from __future__ import annotations

import random
from dataclasses import dataclass, field
from datetime import datetime

DOCUMENT_NUMBER_DIGITS = 3


@dataclass(frozen=True)
class BuildContext:
    """Injectable sources for the document number and the "now" fallback date."""

    rng: random.Random = field(default_factory=random.Random)
    now: datetime = field(default_factory=datetime.now)

    def document_number(self, prefix: str) -> str:
        """Return ``prefix`` followed by three random, zero-padded digits."""
        value = self.rng.randrange(10**DOCUMENT_NUMBER_DIGITS)
        return f"{prefix}{value:0{DOCUMENT_NUMBER_DIGITS}d}"

"""Content signature matching between a compiled artifact and its sources.

A signature keeps only what survives minification: string literals, numeric
literals, CSS selectors and calls to native browser APIs. Identifiers are
ignored because minifiers rename them.
"""

import logging
import re
from dataclasses import dataclass, field
from itertools import islice
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

STRING_RE = re.compile(r"['\"]([^'\"]{3,50})['\"]")
SCRIPT_NUMBER_RE = re.compile(r"\b(\d+\.?\d*)\b")
API_RE = re.compile(
    r"\b(fetch|querySelector|querySelectorAll|getElementById|addEventListener"
    r"|setTimeout|setInterval|requestAnimationFrame|Math\.\w+|JSON\.\w+"
    r"|localStorage\.\w+|sessionStorage\.\w+)\("
)
SELECTOR_RE = re.compile(r"([.#]?[\w-]+)\s*\{")
STYLE_NUMBER_RE = re.compile(r":\s*(\d*\.?\d+(?:px|em|rem|%|vh|vw)?)")


@dataclass
class Signature:
    """Bounded, order-preserving fingerprint of a file's content."""

    strings: list[str] = field(default_factory=list)
    numbers: list[str] = field(default_factory=list)
    selectors: list[str] = field(default_factory=list)
    apis: list[str] = field(default_factory=list)


def _take(pattern: re.Pattern[str], code: str, limit: int) -> list[str]:
    return [m.group(1) for m in islice(pattern.finditer(code), limit)]


def jaccard(a: list[str], b: list[str]) -> float:
    """Intersection over union of two value sets."""
    set_a, set_b = set(a), set(b)
    union = set_a | set_b
    if not union:
        return 0.0
    return len(set_a & set_b) / len(union)


class SignatureMatcher:
    """Scores source candidates against a compiled artifact."""

    def __init__(self, matching: dict[str, Any]) -> None:
        """Initialize the matcher with the 'matching' configuration section."""
        self.threshold = float(matching["threshold"])
        self.weights = {k: float(v) for k, v in matching["weights"].items()}
        self.limits = {k: int(v) for k, v in matching["limits"].items()}

    def extract_signature(self, code: str, *, is_script: bool) -> Signature:
        """Extract the signature of a script or stylesheet."""
        if is_script:
            return Signature(
                strings=_take(STRING_RE, code, self.limits["script_strings"]),
                numbers=_take(SCRIPT_NUMBER_RE, code, self.limits["script_numbers"]),
                apis=[m.group(1) for m in API_RE.finditer(code)],
            )
        return Signature(
            strings=_take(STRING_RE, code, self.limits["style_strings"]),
            numbers=_take(STYLE_NUMBER_RE, code, self.limits["style_numbers"]),
            selectors=_take(SELECTOR_RE, code, self.limits["style_selectors"]),
        )

    def similarity(self, a: Signature, b: Signature, *, is_script: bool) -> float:
        """Weighted Jaccard overlap of the fields present in both signatures.

        The third field is apis for scripts and selectors for stylesheets.
        Weights are normalized by the fields that actually contributed.
        """
        third = "apis" if is_script else "selectors"
        weighted = 0.0
        total = 0.0
        for name in ("strings", "numbers", third):
            values_a = getattr(a, name)
            values_b = getattr(b, name)
            if not values_a or not values_b:
                continue
            weight = self.weights[name]
            weighted += jaccard(values_a, values_b) * weight
            total += weight
        return weighted / total if total else 0.0

    def find_best_match(self, artifact: Path, candidates: list[Path]) -> Path | None:
        """Return the candidate closest to the artifact, or None.

        The highest score wins, earliest candidate on ties. A best score
        under the threshold, or an unreadable artifact, yields None.
        """
        is_script = artifact.name.endswith(".js")
        try:
            artifact_code = artifact.read_text(encoding="utf-8", errors="replace")
        except OSError as exc:
            logger.debug("Cannot read compiled artifact %s: %s", artifact, exc)
            return None
        artifact_sig = self.extract_signature(artifact_code, is_script=is_script)

        best: Path | None = None
        best_score = 0.0
        for candidate in candidates:
            try:
                code = candidate.read_text(encoding="utf-8", errors="replace")
            except OSError as exc:
                logger.debug("Skipping unreadable candidate %s: %s", candidate, exc)
                continue
            score = self.similarity(
                artifact_sig,
                self.extract_signature(code, is_script=is_script),
                is_script=is_script,
            )
            logger.debug("Signature score %.3f for %s", score, candidate)
            if score > best_score:
                best, best_score = candidate, score

        if best is not None and best_score >= self.threshold:
            return best
        return None

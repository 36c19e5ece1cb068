"""
Recovers the structured result from free-form program output.

The analysis programs interleave log lines, progress objects and a final
summary object on stdout. The last line that parses as a JSON object wins.
"""
import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Optional

from analysis_bridge.errors import NoResultFound


class LineOutcome(str, Enum):
    PARSED = "parsed"
    NOT_OBJECT = "not_object"     # does not start with "{"
    MALFORMED = "malformed"       # starts with "{" but is not a valid JSON object


@dataclass
class Extraction:
    result: Optional[dict] = None
    outcomes: list[LineOutcome] = field(default_factory=list)

    @property
    def parsed_count(self) -> int:
        return self.outcomes.count(LineOutcome.PARSED)

    @property
    def malformed_count(self) -> int:
        return self.outcomes.count(LineOutcome.MALFORMED)

    @property
    def skipped_count(self) -> int:
        return len(self.outcomes) - self.parsed_count


def classify_line(line: str) -> tuple[LineOutcome, Optional[dict]]:
    text = line.strip()
    if not text.startswith("{"):
        return LineOutcome.NOT_OBJECT, None
    try:
        value = json.loads(text)
    except json.JSONDecodeError:
        return LineOutcome.MALFORMED, None
    if not isinstance(value, dict):
        return LineOutcome.MALFORMED, None
    return LineOutcome.PARSED, value


def scan(lines: Iterable[str]) -> Extraction:
    """Classify every line; keep the most recent parsed object as the result."""
    extraction = Extraction()
    for line in lines:
        outcome, value = classify_line(line)
        extraction.outcomes.append(outcome)
        if outcome is LineOutcome.PARSED:
            extraction.result = value
    return extraction


def extract(lines: Iterable[str]) -> dict:
    """
    Return the last JSON object found in the output.

    Raises:
        NoResultFound: if no line parsed (including empty output).
    """
    extraction = scan(lines)
    if extraction.result is None:
        raise NoResultFound(
            f"no JSON object in {len(extraction.outcomes)} output lines "
            f"({extraction.malformed_count} malformed)"
        )
    return extraction.result

from dataclasses import dataclass, field
from typing import List, Optional

from course_assistant.config.constants import Route


@dataclass
class RoutingCase:
    query: str
    expected_route: Route
    expected_confidence: Optional[float] = None


@dataclass
class AnswerCase:
    """
    A question with the scores its retrieved passages should carry and the
    expected agent outcome.
    """
    query: str
    passage_contents: List[str]
    scores: List[float]
    should_escalate: bool
    expected_fragment: Optional[str] = None
    expected_confidence: Optional[float] = None
    week_numbers: List[Optional[int]] = field(default_factory=list)

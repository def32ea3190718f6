"""
Agents package.

- QueryRouter: classifies questions into POLICY / CONCEPT / ESCALATE.
- PolicyAgent / ConceptAgent: retrieval-backed answering with confidence gating.
- EscalationHandler: records questions for instructor review.
- AnswerPipeline: router -> agent -> escalation orchestration.
- build_context: constructs all of the above from configuration.
"""

from course_assistant.agents.base_agent import AnsweringAgent
from course_assistant.agents.concept_agent import ConceptAgent
from course_assistant.agents.context import AssistantContext, build_context
from course_assistant.agents.escalation_handler import EscalationHandler
from course_assistant.agents.orchestrator_system import AnswerPipeline
from course_assistant.agents.policy_agent import PolicyAgent
from course_assistant.agents.router_agent import (
    KeywordClassificationStrategy,
    ModelClassificationStrategy,
    QueryRouter,
)
from course_assistant.agents.synthesizers import CompletionSynthesizer, ExtractiveSynthesizer

__all__ = [
    "AnsweringAgent",
    "ConceptAgent",
    "PolicyAgent",
    "AssistantContext",
    "build_context",
    "EscalationHandler",
    "AnswerPipeline",
    "QueryRouter",
    "KeywordClassificationStrategy",
    "ModelClassificationStrategy",
    "CompletionSynthesizer",
    "ExtractiveSynthesizer",
]

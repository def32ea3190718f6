"""
Constants and enumerations for the Course Assistant.

This module defines all application-wide constants including:
- Routes and content types
- Escalation statuses
- Keyword lists for deterministic classification
- Fixed user-facing messages
- Citation formatting constants
"""

from enum import Enum


# ============================================================================
# ROUTES
# ============================================================================

class Route(Enum):
    """Handling route chosen by the QueryRouter for a question."""
    POLICY = "POLICY"        # Syllabus/policy questions -> PolicyAgent
    CONCEPT = "CONCEPT"      # Learning/concept questions -> ConceptAgent
    ESCALATE = "ESCALATE"    # Personal/complex issues -> EscalationHandler


# ============================================================================
# CONTENT TYPES
# ============================================================================

class ContentType(Enum):
    """Category every stored passage belongs to."""
    POLICY = "policy"
    CONCEPT = "concept"


# ============================================================================
# ESCALATION STATUS
# ============================================================================

class EscalationStatus(Enum):
    """Escalations are inserted as pending; resolution happens in the review UI."""
    PENDING = "pending"
    RESOLVED = "resolved"


# ============================================================================
# CLASSIFICATION
# ============================================================================

# Evaluated in this order. Escalate keywords win ties so that a personal or
# emergency phrase is never answered automatically.
ESCALATE_KEYWORDS = [
    "sick",
    "emergency",
    "personal",
    "family",
    "illness",
    "death",
    "hospital",
    "can't attend",
    "missed",
    "conflict",
    "issue",
    "problem",
    "help",
    "urgent",
]

POLICY_KEYWORDS = [
    "deadline",
    "due date",
    "grading",
    "late",
    "attendance",
    "policy",
    "exam date",
    "midterm",
    "final",
    "assignment",
    "submission",
    "late policy",
    "makeup",
    "extension",
]

CONCEPT_KEYWORDS = [
    "explain",
    "how does",
    "what is",
    "algorithm",
    "concept",
    "theory",
    "define",
    "understand",
    "learn",
    "study",
    "data structure",
    "recursion",
    "how to",
    "example",
]

KEYWORD_ESCALATE_CONFIDENCE = 0.9
KEYWORD_MATCH_CONFIDENCE = 0.85
DEFAULT_ROUTE_CONFIDENCE = 0.6

MODEL_EXACT_CONFIDENCE = 0.9
MODEL_PARTIAL_CONFIDENCE = 0.7

CLASSIFICATION_SYSTEM_PROMPT = (
    "You are a query classifier for a university course assistant. "
    "Classify student queries into one of three categories:\n"
    "- POLICY: Questions about course policies, deadlines, grading, attendance, "
    "exam dates, late submissions\n"
    "- CONCEPT: Questions about course concepts, explanations, \"how does X work\", "
    "algorithms, theories\n"
    "- ESCALATE: Personal situations, health issues, emergencies, complex issues "
    "that need professor attention\n\n"
    "Respond with ONLY the category name (POLICY, CONCEPT, or ESCALATE)."
)


# ============================================================================
# ANSWERING
# ============================================================================

# Substrings (lowercase) in generated text that mean the model could not answer.
# This is a heuristic boundary, not a structured contract.
REFUSAL_MARKERS = [
    "i don't know",
    "not in the context",
    "escalate",
]

NOT_CONFIDENT_MESSAGE = (
    "I'm not confident in the answer to this question. "
    "Your question has been escalated to the professor."
)
ERROR_MESSAGE = (
    "I encountered an error processing your question. "
    "Your question has been escalated to the professor."
)
POLICY_NO_INFORMATION_MESSAGE = (
    "I don't have enough information in the syllabus to answer this question. "
    "Your question has been escalated to the professor."
)
CONCEPT_NO_INFORMATION_MESSAGE = (
    "I don't have enough information about this concept in the course materials. "
    "Your question has been escalated to the professor."
)
EXTRACTIVE_NOT_FOUND_ANSWER = "I don't know based on the provided course materials."

# Score assigned to passages returned by the unranked fallback scan.
UNRANKED_PLACEHOLDER_SCORE = 0.5


# ============================================================================
# CITATIONS
# ============================================================================

CITATION_SOURCE_PREFIX = "Syllabus"
CITATION_EXCERPT_LENGTH = 200
CITATION_ELLIPSIS = "..."


# ============================================================================
# ESCALATION
# ============================================================================

ESCALATION_REFERENCE_LENGTH = 8
DEFAULT_STUDENT_NAME = "Student"


# ============================================================================
# INGESTION
# ============================================================================

# Course the CLI uses by default; the demo syllabus is loaded into it
DEFAULT_COURSE_ID = "demo-cmps-5j"

INGEST_POLICY_KEYWORDS = [
    "deadline", "grading", "late", "attendance", "policy", "exam date",
    "due date", "submission", "penalty", "extension", "absence", "missed",
    "grade", "points", "percentage", "rubric", "cheating", "academic integrity",
    "syllabus", "course policy", "late work", "makeup", "retake", "drop date",
    "withdrawal", "office hours", "email policy", "communication policy",
]

INGEST_CONCEPT_KEYWORDS = [
    "explain", "algorithm", "data structure", "recursion", "how does", "what is",
    "concept", "definition", "example", "understand", "learn", "teach", "demonstrate",
    "theory", "principle", "method", "technique", "approach", "implementation",
    "analysis", "design", "pattern", "optimization", "complexity", "efficiency",
]


# ============================================================================
# STORAGE
# ============================================================================

MATCH_DOCUMENTS_RPC = "match_documents"
COURSE_CONTENT_TABLE = "course_content"
ESCALATIONS_TABLE = "escalations"
PROFILES_TABLE = "profiles"
CHAT_LOGS_TABLE = "chat_logs"

# PostgREST / Postgres codes meaning the similarity RPC is not provisioned.
MISSING_FUNCTION_ERROR_CODES = {"PGRST202", "42883"}

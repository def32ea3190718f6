from course_assistant.config.constants import ContentType

# Unit vectors in 2D; against the query vector (1, 0) their cosine scores are
# 1.0, 0.8, 0.6 and 0.0 respectively.
STORED_PASSAGES = [
    {"content": "Exam schedule passage", "embedding": (1.0, 0.0), "content_type": ContentType.POLICY},
    {"content": "Grading passage", "embedding": (0.8, 0.6), "content_type": ContentType.POLICY},
    {"content": "Recursion passage", "embedding": (0.6, 0.8), "content_type": ContentType.CONCEPT},
    {"content": "Unrelated passage", "embedding": (0.0, 1.0), "content_type": ContentType.POLICY},
]

QUERY_VECTOR = [1.0, 0.0]

# (score_threshold, content_type, expected contents in order)
THRESHOLD_CASES = [
    (None, None, ["Exam schedule passage", "Grading passage", "Recursion passage", "Unrelated passage"]),
    (0.7, None, ["Exam schedule passage", "Grading passage"]),
    (0.5, ContentType.CONCEPT, ["Recursion passage"]),
    (0.7, ContentType.CONCEPT, []),
    (0.95, ContentType.POLICY, ["Exam schedule passage"]),
]

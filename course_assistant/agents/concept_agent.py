"""
ConceptAgent implementation.

Explains course concepts from passages tagged `concept`.

Examples:
- "Explain how recursion works"
- "What is a binary search tree?"
"""

from course_assistant.agents.base_agent import AnsweringAgent
from course_assistant.config.constants import CONCEPT_NO_INFORMATION_MESSAGE, ContentType


class ConceptAgent(AnsweringAgent):

    agent_name = "ConceptAgent"
    content_type = ContentType.CONCEPT
    no_information_message = CONCEPT_NO_INFORMATION_MESSAGE
    system_prompt = (
        "You are a helpful course assistant explaining course concepts and answering "
        "learning-related questions.\n\n"
        "STRICT RULES:\n"
        "- Use ONLY the course materials in the context.\n"
        "- If the information is not in the context, respond with \"I don't know\".\n\n"
        "ANSWERING GUIDELINES:\n"
        "- Give a clear, educational explanation.\n"
        "- Cite materials as \"See Syllabus page X\" or \"See Lecture Week Y\"."
    )

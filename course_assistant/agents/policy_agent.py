"""
PolicyAgent implementation.

Answers questions about course policies, deadlines, grading and other
administrative matters from passages tagged `policy`.

Examples:
- "When is the midterm exam?"
- "What is the late submission policy?"
"""

from course_assistant.agents.base_agent import AnsweringAgent
from course_assistant.config.constants import POLICY_NO_INFORMATION_MESSAGE, ContentType


class PolicyAgent(AnsweringAgent):

    agent_name = "PolicyAgent"
    content_type = ContentType.POLICY
    no_information_message = POLICY_NO_INFORMATION_MESSAGE
    system_prompt = (
        "You are a helpful course assistant answering questions about course policies, "
        "deadlines, and administrative matters.\n\n"
        "STRICT RULES:\n"
        "- Use ONLY information explicitly present in the syllabus context.\n"
        "- Do NOT add background knowledge or assumptions.\n"
        "- If the information is not in the context, respond with \"I don't know\".\n\n"
        "ANSWERING GUIDELINES:\n"
        "- Be clear and concise.\n"
        "- Cite page numbers as \"See Syllabus page X\" when referencing specific pages."
    )

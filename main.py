from __future__ import annotations
from typing import NoReturn
from logging import Logger

from course_assistant.agents.context import AssistantContext
from course_assistant.config.settings import config
from course_assistant.helpers.assistant_helper import init
from course_assistant.models import AgentResponse
from course_assistant.utils.exceptions import EscalationPersistenceError


def _prompt(label: str, default: str) -> str:
    value = input(f"{label} [{default}]: ").strip()
    return value or default


def _print_response(response: AgentResponse) -> None:
    print("\n--- Answer ---")
    print(f"[{response.route.value if response.route else '?'}] {response.response}")
    if response.citations:
        print("\nSources:")
        for citation in response.citations:
            page = f" (page {citation.page})" if citation.page is not None else ""
            print(f"  - {citation.source}{page}: {citation.content}")
    if response.escalation_id:
        print(f"\nEscalated. Reference ID: {response.escalation_id[:8]}")
    print(f"confidence: {response.confidence:.2f}")
    print("--------------")


def _query_mode(context: AssistantContext, query: str, course_id: str, student_id: str, log: Logger) -> None:
    try:
        response = context.pipeline.handle_question(query, course_id, student_id)
        _print_response(response)
    except EscalationPersistenceError as e:
        log.error(f"Escalation could not be saved: {e}", exc_info=True)
        print(f"Error: your question could not be escalated, please try again: {e}")
    except Exception as e:
        log.error(f"Unexpected error while handling query: {e}", exc_info=True)
        print(f"Unexpected error while handling query: {e}")


def _system(log: Logger, context: AssistantContext) -> None:
    print("==============================================")
    print(" Course Assistant")
    print("==============================================")

    try:
        course_id = _prompt("Course id", config.COURSE_ID)
        student_id = _prompt("Student id", "demo-student")
    except (KeyboardInterrupt, EOFError):
        print("\nExiting. Goodbye!")
        return

    while True:
        print("==============================================")
        print("Type your question about the course.")
        print("Type 'exit' or 'quit' to exit.\n")
        print("==============================================")

        try:
            query = input(">>> ").strip()
        except (KeyboardInterrupt, EOFError):
            print("\nExiting. Goodbye!")
            break

        if not query:
            print("no query entered")
            continue

        if query.lower() in {"exit", "quit", "q"}:
            print("Goodbye!")
            break

        _query_mode(context, query, course_id, student_id, log)


def main() -> NoReturn:
    # COURSE_PDF_PATH wins over the demo syllabus; both skip a course that already has content
    log, context = init(
        load_demo=True,
        pdf_path=config.COURSE_PDF_PATH or None,
        course_id=config.COURSE_ID,
    )
    if not config.validate():
        print("OPENAI_API_KEY not set: using keyword routing and extractive answers.")
    _system(log, context)
    raise SystemExit(0)


if __name__ == "__main__":
    main()

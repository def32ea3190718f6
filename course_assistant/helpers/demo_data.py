"""
Demo course content.

A small introductory-Java syllabus used to seed a store for the CLI and the
end-to-end tests.
"""

from typing import List

from course_assistant.config.constants import DEFAULT_COURSE_ID, ContentType
from course_assistant.models import Passage

DEMO_COURSE_ID = DEFAULT_COURSE_ID

_DEMO_CHUNKS = [
    {
        "content": (
            "Exam Schedule: Midterm Exam - Week 7 (November 18th), Final Exam - December 12th, "
            "8:00 AM. Exams are closed book, but you may bring one 8.5x11 sheet of handwritten "
            "notes. Calculators are not permitted. You must bring your student ID to all exams."
        ),
        "page_number": 2,
        "week_number": None,
        "topic": None,
        "content_type": ContentType.POLICY,
    },
    {
        "content": (
            "Grading Policy: Assignments (40%), Midterm Exam (20%), Final Exam (30%), "
            "Participation (10%). Late assignments will be accepted with a 10% penalty per day, "
            "up to 3 days late. After 3 days, no credit will be given. All assignments must be "
            "submitted via Gradescope before 11:59 PM on the due date."
        ),
        "page_number": 2,
        "week_number": None,
        "topic": None,
        "content_type": ContentType.POLICY,
    },
    {
        "content": (
            "Attendance Policy: Regular attendance is expected. Students are allowed 2 unexcused "
            "absences. More than 2 absences may result in grade reduction. Please notify the "
            "instructor in advance if you must miss class."
        ),
        "page_number": 3,
        "week_number": None,
        "topic": None,
        "content_type": ContentType.POLICY,
    },
    {
        "content": (
            "Office Hours: Monday/Wednesday 2-3 PM, Engineering 2, Room 218. You can also schedule "
            "appointments via email. Email response time: within 24-48 hours on weekdays."
        ),
        "page_number": 3,
        "week_number": None,
        "topic": None,
        "content_type": ContentType.POLICY,
    },
    {
        "content": (
            "Week 1 continued: Java program structure includes the class definition, the main "
            "method where program execution begins, and the System.out.println() statement for "
            "output. The Java compiler (javac) converts .java files into .class bytecode files. "
            "The Java Virtual Machine (JVM) executes the bytecode."
        ),
        "page_number": 4,
        "week_number": 1,
        "topic": "Introduction to Java and Programming Environments",
        "content_type": ContentType.CONCEPT,
    },
    {
        "content": (
            "Recursion is a technique where a method calls itself to solve a smaller instance of "
            "the same problem. Every recursive method needs a base case that stops the recursion "
            "and a recursive case that moves toward the base case. Factorial and Fibonacci are "
            "classic examples."
        ),
        "page_number": 9,
        "week_number": 8,
        "topic": "Recursion",
        "content_type": ContentType.CONCEPT,
    },
]


def demo_passages(course_id: str = DEMO_COURSE_ID) -> List[Passage]:
    """Demo passages without embeddings (the caller embeds them)."""
    return [
        Passage(
            content=chunk["content"],
            course_id=course_id,
            content_type=chunk["content_type"],
            page_number=chunk["page_number"],
            week_number=chunk["week_number"],
            topic=chunk["topic"],
        )
        for chunk in _DEMO_CHUNKS
    ]

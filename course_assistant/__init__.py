"""
Course Assistant - question routing and retrieval-augmented answering for
course materials, with escalation to the instructor.
"""

__version__ = "0.1.0"

# (week_number, topic, expected source label)
SOURCE_LABEL_CASES = [
    (None, None, "Syllabus"),
    (7, None, "Syllabus Week 7"),
    (None, "Recursion", "Syllabus - Recursion"),
    (8, "Recursion", "Syllabus Week 8 - Recursion"),
]

# (passage content, expected citation content)
EXCERPT_CASES = [
    ("Short passage.", "Short passage...."),
    ("x" * 200, "x" * 200 + "..."),
    ("y" * 500, "y" * 200 + "..."),
    ("", "..."),
]

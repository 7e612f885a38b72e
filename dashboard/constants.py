from datetime import date

PROGRAM_NAME = "GHOST MODE 90"
PROGRAM_DAYS = 90
MISSION_STATEMENT = "Disappear. Focus. Rebuild."

MISSION_TASKS = [
    {"key": "deepwork", "title": "Deep Work", "has_time": True, "target": "4 hrs"},
    {"key": "skill", "title": "Skill Learning", "has_time": True, "target": "1 hr"},
    {"key": "exercise", "title": "Exercise", "has_time": True, "target": "45 mins"},
    {"key": "reading", "title": "Reading", "has_time": True, "target": "30 mins"},
    {"key": "journal", "title": "Journal", "has_time": False, "target": "1 entry"},
]
EDITABLE_TASK_FIELDS = {"time_spent", "note"}

# Tuned for a five-task template; revisit if MISSION_TASKS changes size.
INTENSITY_THRESHOLDS = [
    (1, 0.4),
    (4, 0.7),
    (5, 1.0),
]
CONSISTENCY_WINDOW_DAYS = 90

BOOK_STATUSES = ["To Read", "Reading", "Finished"]
BOOK_STATUS_FINISHED = "Finished"

UNIT_NOT_STARTED = "Not Started"
UNIT_COMPLETED = "Completed"

SYLLABUS = [
    {
        "name": "Engineering Physics",
        "units": [
            "Wave Optics",
            "Crystallography & X-Ray",
            "Dielectric & Magnetic",
            "Quantum Mechanics",
            "Semiconductors",
        ],
    },
    {
        "name": "Linear Algebra & Calculus",
        "units": [
            "Linear Algebra",
            "Eigen Values",
            "Calculus & Mean Value",
            "Partial Differentiation",
            "Multiple Integrals",
        ],
    },
    {
        "name": "C Programming",
        "units": [
            "Target 1: Basics & Algorithms",
            "Target 2: Control Structures",
            "Target 3: Arrays & Pointers",
            "Target 4: Functions & Strings",
            "Target 5: Structures & Files",
        ],
    },
    {
        "name": "Civil & Mechanical",
        "units": [
            "Civil: Basics",
            "Civil: Surveying",
            "Civil: Transport/Water",
            "Mech: Materials & Mfg",
            "Mech: Thermal/Power",
        ],
    },
    {
        "name": "English",
        "units": [
            "Unit 1 (Self Study)",
            "Unit 2 (Self Study)",
            "Unit 3 (Self Study)",
            "Unit 4 (Self Study)",
            "Unit 5 (Self Study)",
        ],
    },
]
DEFAULT_PLAN_START = date(2026, 1, 13)
DEFAULT_EXAM_START = date(2026, 1, 20)

RULES = [
    "No Social Media (IG, X, TikTok, FB)",
    "No Video Games",
    "No Junk Food / Sugar",
    "No Porn / Masturbation",
    "No Alcohol / Drugs",
    "Wake up by 6:00 AM",
    "Cold Shower Daily",
]

JOURNAL_FIELDS = [
    ("well", "What went well today?"),
    ("avoided", "What did I avoid?"),
    ("lesson", "Lesson of the day"),
]
JOURNAL_SAVED_SECONDS = 3.0

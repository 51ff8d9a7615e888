"""Keyword tables and weights used by the confidence classifier.

Plain data: the scoring functions in ``classifier.py`` read these and
nothing else, so tuning happens here.
"""

from __future__ import annotations

import re

# Scores at or above this (and strictly above the other domain) win.
ROUTING_THRESHOLD = 0.3

# Keywords this short only count as whole words ("er" must not hit "water").
SHORT_KEYWORD_MAX_LEN = 3

# --- Healthcare ---

HEALTHCARE_KEYWORDS: list[str] = [
    # General and clinical terms
    "health",
    "medical",
    "disease",
    "symptom",
    "treatment",
    "medicine",
    "doctor",
    "hospital",
    "patient",
    "covid",
    "coronavirus",
    "vaccine",
    "vaccination",
    "pandemic",
    "epidemic",
    "virus",
    "bacteria",
    "infection",
    "diagnosis",
    "therapy",
    "pharmaceutical",
    "drug",
    "medication",
    "prescription",
    "wellness",
    "nutrition",
    "diet",
    "exercise",
    "fitness",
    "mental health",
    "depression",
    "anxiety",
    "stress",
    "healthcare",
    "clinical",
    "surgery",
    "cancer",
    "diabetes",
    "heart disease",
    "blood pressure",
    "blood",
    "cholesterol",
    "immunity",
    "immune system",
    "allergy",
    "asthma",
    "screening",
    "checkup",
    "check-up",
    "preventive care",
    "preventative",
    "hiv",
    "aids",
    "tuberculosis",
    "malaria",
    "dengue",
    "alzheimer",
    "obesity",
    "flu",
    "influenza",
    "clinical trial",
    "drug approval",
    "fda",
    "who",
    "cdc",
    # Urgency
    "pain",
    "chest",
    "emergency",
    "urgent",
    "severe",
    "bleeding",
    "poisoning",
    # Procedures and tests
    "scan",
    "ct scan",
    "mri",
    "x-ray",
    "ultrasound",
    "biopsy",
    "mammogram",
    "colonoscopy",
    "endoscopy",
    "blood test",
    "lab test",
    "imaging",
    "radiology",
    "procedure",
    "test",
    "exam",
    "physical",
    # Care settings
    "appointment",
    "consult",
    "specialist",
    "physician",
    "nurse",
    "clinic",
    "emergency room",
    "er",
    "urgent care",
    "primary care",
    # Research and publications
    "paper",
    "study",
    "research",
    "article",
    "publication",
    "journal",
    "published",
    "blog",
    "science",
    "evidence",
    "findings",
]

# Keyword hits are divided by this and capped, so keyword spam alone
# never scores above KEYWORD_SCORE_CAP.
KEYWORD_DIVISOR = 2.5
KEYWORD_SCORE_CAP = 0.5

HEALTH_QUESTION_PATTERN = re.compile(
    r"what is|how to|symptoms of|treatment for|cure for|prevent|risk of|should i|what.*screen",
    re.IGNORECASE,
)
SCREENING_INTENT_PATTERN = re.compile(
    r"screening|checkup|check-up|physical|exam|test.*for|preventive|preventative"
)
NEWS_INTENT_PATTERN = re.compile(r"latest|news|recent|update|current|today|this week")

HEALTH_QUESTION_BONUS = 0.3
SCREENING_INTENT_BONUS = 0.4
NEWS_INTENT_BONUS = 0.15

# --- Personal ---

# Any of these means the message is about health, not small talk.
HEALTHCARE_OVERLAP_KEYWORDS: list[str] = [
    "covid",
    "vaccine",
    "disease",
    "symptom",
    "treatment",
    "medical",
    "doctor",
    "hospital",
    "patient",
    "diagnosis",
    "therapy",
    "medication",
    "cancer",
    "diabetes",
    "health",
    "paper",
    "study",
    "research",
    "article",
    "published",
    "journal",
    "infection",
    "virus",
    "drug",
    "prescription",
    "blood",
]

CONVERSATIONAL_KEYWORDS: list[str] = [
    "hello",
    "hi",
    "hey",
    "how are you",
    "what's up",
    "thanks",
    "thank you",
    "my name is",
    "i am",
    "i'm",
    "i like",
    "i love",
    "i enjoy",
    "my favorite",
    "i work",
    "i live",
    "i'm from",
    "tell me about yourself",
    "who are you",
    "sorry",
    "excuse me",
]

CONTEXT_KEYWORDS: list[str] = [
    "name",
    "age",
    "live",
    "from",
    "interested",
    "like",
    "enjoy",
    "favorite",
    "work",
    "job",
]

PERSONAL_HEALTH_OVERLAP_SCORE = 0.2
PERSONAL_BOTH_SCORE = 0.9
PERSONAL_CONVERSATIONAL_SCORE = 0.7
PERSONAL_CONTEXT_SCORE = 0.8
# Below ROUTING_THRESHOLD so messages with no signal at all fall to the
# general handler instead of winning personal by default.
PERSONAL_DEFAULT_SCORE = 0.25

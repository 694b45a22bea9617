"""Job description parsing: skills, experience level, education and keywords.

Everything here is deterministic: the same text always yields the same
``JobRequirements``. Skill recognition is vocabulary based; terms missing from
the vocabulary are only picked up as generic keywords.
"""

import logging
import re

from models.schemas.job_requirements import (
    MAX_KEYWORDS,
    CompensationInfo,
    ExperienceLevel,
    JobRequirements,
    QualificationSections,
    SalaryRange,
)
from services.errors import InputError
from services.text_utils import find_terms, is_bullet, strip_bullet, tokenize_words
from services.vocabulary import DEFAULT_VOCABULARY, Vocabulary

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# JD section headings. Checked in order, so "Preferred Qualifications" is
# preferred before "qualification" can make it required.
# ---------------------------------------------------------------------------
_HEADING_KINDS: tuple[tuple[str, re.Pattern], ...] = (
    ("preferred", re.compile(
        r"\b(?:preferred|nice[\s-]to[\s-]haves?|bonus|desired|desirable|pluses)\b", re.IGNORECASE)),
    ("responsibilities", re.compile(
        r"\b(?:responsibilit(?:y|ies)|duties|what you(?:'ll| will) do|the role|day[\s-]to[\s-]day)\b",
        re.IGNORECASE)),
    ("other", re.compile(
        r"\b(?:benefits|perks|what we offer|about (?:us|the company|the team)|who we are|"
        r"compensation|salary|our mission|overview|equal opportunity)\b", re.IGNORECASE)),
    ("required", re.compile(
        r"\b(?:requirements?|required|qualifications?|must[\s-]haves?|what you(?:'ll| will)? need|"
        r"what we(?:'re| are) looking for|skills|minimum|basic)\b", re.IGNORECASE)),
)
_MAX_HEADING_LENGTH = 60
_MAX_HEADING_WORDS = 6

# Sentence boundaries inside a line; "node.js" style dots are kept
_SENTENCE_RE = re.compile(r"(?<=[.!?;])\s+")

# "3-5 years", "3 to 5 years" before "5+ years"
EXPERIENCE_RANGE_RE = re.compile(r"(\d{1,2})\s*(?:-|–|to)\s*(\d{1,2})\+?\s*(?:years?|yrs?)\b", re.IGNORECASE)
EXPERIENCE_YEARS_RE = re.compile(r"(\d{1,2})\+?\s*(?:years?|yrs?)\b", re.IGNORECASE)
ENTRY_LEVEL_MAX_YEARS = 2
MID_LEVEL_MAX_YEARS = 5  # exclusive

# "$90,000 - $120,000", "$90k-$120k", "90,000-120,000 USD"
_AMOUNT = r"(\d{1,3}(?:,\d{3})+|\d+(?:\.\d+)?)\s*(k)?"
SALARY_PATTERNS: tuple[re.Pattern, ...] = (
    re.compile(rf"\$\s*{_AMOUNT}\s*(?:-|–|to)\s*\$?\s*{_AMOUNT}", re.IGNORECASE),
    re.compile(rf"{_AMOUNT}\s*(?:-|–|to)\s*{_AMOUNT}\s*(?:usd|dollars?)\b", re.IGNORECASE),
)

QUALIFICATION_MIN_LENGTH = 10


def _classify_heading(line: str, vocabulary: Vocabulary) -> str | None:
    """Return the heading kind for a JD section heading, else None.

    Lines naming a known skill are content, even when they are short.
    """
    stripped = line.strip()
    if not stripped or is_bullet(stripped) or len(stripped) > _MAX_HEADING_LENGTH:
        return None
    if not stripped.endswith(":") and len(stripped.split()) > _MAX_HEADING_WORDS:
        return None
    if find_terms(stripped, vocabulary.skill_terms):
        return None
    for kind, pattern in _HEADING_KINDS:
        if pattern.search(stripped):
            return kind
    return None


def _require_text(text) -> str:
    if not isinstance(text, str):
        raise InputError(f"Job description must be a string, got {type(text).__name__}")
    return text


def extract_requirements(text: str, vocabulary: Vocabulary = DEFAULT_VOCABULARY) -> JobRequirements:
    """Extract structured requirements from a raw job description."""
    text = _require_text(text)
    if not text.strip():
        return JobRequirements()

    required, preferred = classify_skills(text, vocabulary)
    requirements = JobRequirements(
        required_skills=required,
        preferred_skills=preferred,
        experience_level=extract_experience_level(text, vocabulary),
        education=find_terms(text, vocabulary.education_terms),
        certifications=find_terms(text, vocabulary.certification_terms),
        keywords=extract_keywords(text, vocabulary),
    )
    logger.debug(
        "Extracted requirements: %d required, %d preferred, level=%s, %d keywords",
        len(required), len(preferred), requirements.experience_level, len(requirements.keywords),
    )
    return requirements


def classify_skills(text: str, vocabulary: Vocabulary = DEFAULT_VOCABULARY) -> tuple[list[str], list[str]]:
    """Split vocabulary skills found in ``text`` into (required, preferred).

    Priority per sentence: an inline indicator on the sentence, then the
    enclosing section, then required. When both indicator kinds occur in
    one sentence, preferred wins.
    """
    required: list[str] = []
    preferred: list[str] = []
    section: str | None = None

    for line in text.split("\n"):
        heading = _classify_heading(line, vocabulary)
        if heading is not None:
            section = heading
            continue
        for sentence in _SENTENCE_RE.split(line):
            skills = find_terms(sentence, vocabulary.skill_terms)
            if not skills:
                continue
            lowered = sentence.lower()
            if any(ind in lowered for ind in vocabulary.preferred_indicators):
                bucket = preferred
            elif any(ind in lowered for ind in vocabulary.required_indicators):
                bucket = required
            elif section == "preferred":
                bucket = preferred
            else:
                bucket = required
            bucket.extend(s for s in skills if s not in bucket)

    return required, preferred


def _level_for_years(years: int) -> ExperienceLevel:
    if years <= ENTRY_LEVEL_MAX_YEARS:
        return "entry-level"
    if years < MID_LEVEL_MAX_YEARS:
        return "mid-level"
    return "senior-level"


def extract_experience_level(text: str, vocabulary: Vocabulary = DEFAULT_VOCABULARY) -> ExperienceLevel:
    """Years of experience first, then level keywords such as "senior" or "director"."""
    match = EXPERIENCE_RANGE_RE.search(text)
    if match:
        low, high = sorted((int(match.group(1)), int(match.group(2))))
        return _level_for_years((low + high) // 2)
    match = EXPERIENCE_YEARS_RE.search(text)
    if match:
        return _level_for_years(int(match.group(1)))

    lowered = text.lower()
    for keyword, level in vocabulary.experience_levels:
        if re.search(rf"\b{re.escape(keyword)}\b", lowered):
            return level
    return "not-specified"


def extract_keywords(text: str, vocabulary: Vocabulary = DEFAULT_VOCABULARY) -> list[str]:
    """Content words in first-occurrence order, capped at MAX_KEYWORDS.

    Compound tokens (``full-stack``, ``CI/CD``) are kept whole and also
    contribute their parts.
    """
    keywords: list[str] = []
    seen: set[str] = set()
    for token in tokenize_words(text):
        token = token.lower()
        candidates = [token]
        if "-" in token or "/" in token:
            candidates += [p for p in re.split(r"[-/]", token) if p]
        for word in candidates:
            if word in seen or len(word) < 3 or not word[0].isalpha():
                continue
            if word in vocabulary.stopwords or word.endswith("ly"):
                continue
            seen.add(word)
            keywords.append(word)
            if len(keywords) >= MAX_KEYWORDS:
                return keywords
    return keywords


def extract_qualification_sections(
    text: str, vocabulary: Vocabulary = DEFAULT_VOCABULARY
) -> QualificationSections:
    """Collect bullet items under required, preferred and responsibilities headings."""
    text = _require_text(text)
    buckets: dict[str, list[str]] = {"required": [], "preferred": [], "responsibilities": []}
    section: str | None = None

    for line in text.split("\n"):
        heading = _classify_heading(line, vocabulary)
        if heading is not None:
            section = heading
            continue
        if section in buckets and is_bullet(line):
            item = strip_bullet(line)
            if len(item) > QUALIFICATION_MIN_LENGTH:
                buckets[section].append(item)

    return QualificationSections(
        required_qualifications=buckets["required"],
        preferred_qualifications=buckets["preferred"],
        responsibilities=buckets["responsibilities"],
    )


def _amount(number: str, thousands: str | None) -> int:
    value = float(number.replace(",", ""))
    if thousands:
        value *= 1000
    return int(value)


def extract_compensation(text: str, vocabulary: Vocabulary = DEFAULT_VOCABULARY) -> CompensationInfo:
    """Salary range, currency and benefits mentioned in the job description."""
    text = _require_text(text)
    salary_range = None
    currency = None
    for pattern in SALARY_PATTERNS:
        match = pattern.search(text)
        if match:
            low = _amount(match.group(1), match.group(2))
            high = _amount(match.group(3), match.group(4))
            salary_range = SalaryRange(min=min(low, high), max=max(low, high))
            currency = "USD"
            break

    benefits = [b for b in vocabulary.benefit_terms if b in text.lower()]
    return CompensationInfo(salary_range=salary_range, currency=currency, benefits=benefits)

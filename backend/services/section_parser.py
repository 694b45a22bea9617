"""Resume section segmentation and structured extraction."""

import logging
import re

from rapidfuzz import fuzz, process

from models.schemas.resume_content import (
    ContactInfo,
    EducationEntry,
    ExperienceEntry,
    ParsedSection,
    ResumeContent,
    ResumeSections,
)
from services.errors import InputError
from services.text_utils import find_terms, is_bullet, strip_bullet
from services.vocabulary import DEFAULT_VOCABULARY, Vocabulary

logger = logging.getLogger(__name__)

# Section header patterns and their canonical names
SECTION_PATTERNS: dict[str, list[str]] = {
    "contact": [
        r"contact(?:\s*(?:info(?:rmation)?|details))?",
        r"personal\s*(?:information|details)",
    ],
    "experience": [
        r"(?:work|professional|employment)\s*(?:experience|history)",
        r"experience",
        r"employment",
        r"career\s*(?:history|path)",
    ],
    "education": [
        r"education(?:al)?\s*(?:background|qualifications|history)?",
        r"academic\s*(?:background|qualifications|history)",
    ],
    "skills": [
        r"(?:technical|core|key|professional)?\s*skills(?:\s*(?:&|and)\s*\w+)?",
        r"(?:technical|core)?\s*(?:competencies|proficiencies|expertise)",
        r"technologies",
    ],
    "summary": [
        r"(?:professional|executive|career)?\s*summary",
        r"(?:career|professional)?\s*objective",
        r"(?:professional\s+)?profile",
        r"about\s*me",
    ],
    "certifications": [
        r"certific(?:ations?|ates?)",
        r"licen[sc]es?(?:\s*(?:&|and)?\s*certific(?:ations?|ates?))?",
    ],
    # Recognized so their content does not leak into other sections
    "projects": [
        r"(?:key|notable|selected|personal)?\s*projects",
        r"portfolio",
    ],
    "awards": [
        r"(?:key\s+)?achievements?",
        r"awards?(?:\s*(?:&|and)\s*honou?rs)?",
        r"honou?rs",
    ],
}

# Compile all patterns into a single regex per section
_COMPILED: dict[str, re.Pattern] = {}
for section, patterns in SECTION_PATTERNS.items():
    combined = "|".join(patterns)
    _COMPILED[section] = re.compile(rf"^\s*(?:{combined})\s*:?\s*$", re.IGNORECASE)

# Canonical spellings for typo-tolerant heading detection
HEADING_SYNONYMS: dict[str, str] = {
    "experience": "experience",
    "work experience": "experience",
    "professional experience": "experience",
    "work history": "experience",
    "employment history": "experience",
    "education": "education",
    "skills": "skills",
    "technical skills": "skills",
    "competencies": "skills",
    "summary": "summary",
    "professional summary": "summary",
    "profile": "summary",
    "objective": "summary",
    "certifications": "certifications",
    "licenses": "certifications",
    "projects": "projects",
    "achievements": "awards",
    "awards": "awards",
}
_HEADING_CHOICES = list(HEADING_SYNONYMS)
FUZZY_HEADING_THRESHOLD = 90
_FUZZY_MAX_LENGTH = 30

# Contact info patterns
EMAIL_RE = re.compile(r"[\w.+-]+@[\w-]+\.[\w.-]*[A-Za-z]")
PHONE_RE = re.compile(r"(?:\+?1[-.\s]?)?\(?\d{3}\)?[-.\s]?\d{3}[-.\s]?\d{4}")
LINKEDIN_RE = re.compile(r"(?:https?://)?(?:www\.)?linkedin\.com/in/[\w-]+", re.IGNORECASE)
NAME_RE = re.compile(r"\b([A-Z][a-z'\-]+(?:\s+[A-Z]\.)?\s+[A-Z][a-z'\-]+)\b")

# Date ranges: "Jan 2019 - Present", "2020 - 2023", "March 2018 – Nov 2022", "03/2019 to 05/2021"
_MONTHS = (
    r"(?:Jan(?:uary)?|Feb(?:ruary)?|Mar(?:ch)?|Apr(?:il)?|May|Jun(?:e)?|"
    r"Jul(?:y)?|Aug(?:ust)?|Sep(?:t(?:ember)?)?|Oct(?:ober)?|Nov(?:ember)?|Dec(?:ember)?)"
)
_DATE = rf"(?:{_MONTHS}\.?\s*\d{{4}}|\d{{1,2}}/\d{{4}}|\d{{4}})"
DATE_RANGE_RE = re.compile(
    rf"({_DATE})\s*(?:[-–—]+|to)\s*({_DATE}|[Pp]resent|[Cc]urrent|[Nn]ow)",
    re.IGNORECASE,
)
YEAR_RE = re.compile(r"\b(?:19|20)\d{2}\b")
_PARENS_RE = re.compile(r"\([^)]*\)")

# Separators between position and company, tried in order
HEADER_SEPARATORS = ("|", " at ", " @ ", " – ", " — ", " - ", ", ")
_MAX_HEADER_LENGTH = 100
_MAX_HEADER_WORDS = 12

DEGREE_RE = re.compile(
    r"\b(?:bachelor(?:'?s)?|master(?:'?s)?|ph\.?\s?d\.?|doctorate|doctoral|associate(?:'?s)?|"
    r"diploma|mba|b\.?\s?sc\.?|m\.?\s?sc\.?|b\.?\s?tech|m\.?\s?tech|b\.?\s?eng|m\.?\s?eng|"
    r"b\.?s\.?|b\.?a\.?|m\.?s\.?|m\.?a\.?)(?![A-Za-z])",
    re.IGNORECASE,
)
INSTITUTION_RE = re.compile(
    r"\b(?:university|college|institute|school|academy|polytechnic)\b", re.IGNORECASE
)
_EDUCATION_SPLIT_RE = re.compile(r",|\|| - |\bat\b|\bfrom\b", re.IGNORECASE)
_FIELD_RE = re.compile(r"\s+in\s+(.+)$", re.IGNORECASE)

SKILL_SPLIT_RE = re.compile(r"[,;|•]")
_MAX_SKILL_LENGTH = 50

# Preamble lines at least this long count as an implicit summary
SUMMARY_MIN_WORDS = 6


def _classify_heading(line: str) -> str | None:
    """Return the section a heading line opens, or None for content lines."""
    stripped = line.strip()
    if not stripped or len(stripped) > 60 or is_bullet(stripped):
        return None
    for section_name, pattern in _COMPILED.items():
        if pattern.match(stripped):
            return section_name
    return _fuzzy_heading(stripped.rstrip(":").strip())


def _fuzzy_heading(candidate: str) -> str | None:
    """Near-miss match for short heading-like lines ("Experiance", "Educaton")."""
    if len(candidate) > _FUZZY_MAX_LENGTH or len(candidate.split()) > 3:
        return None
    if not candidate.replace(" ", "").replace("&", "").isalpha():
        return None
    match = process.extractOne(
        candidate.lower(), _HEADING_CHOICES, scorer=fuzz.ratio,
        score_cutoff=FUZZY_HEADING_THRESHOLD,
    )
    if match is None:
        return None
    logger.debug("Fuzzy heading %r -> %r (%.0f)", candidate, match[0], match[1])
    return HEADING_SYNONYMS[match[0]]


def detect_sections(text: str) -> list[ParsedSection]:
    """Split resume text into ordered sections.

    Lines before the first heading are reported as a ``contact`` section.
    Blank lines are dropped.
    """
    sections: list[ParsedSection] = []
    current: ParsedSection | None = None

    for index, line in enumerate(text.split("\n")):
        stripped = line.strip()
        if not stripped:
            continue
        section_type = _classify_heading(stripped)
        if section_type:
            current = ParsedSection(section_type=section_type, heading=stripped, start_line=index)
            sections.append(current)
        elif current is None:
            current = ParsedSection(section_type="contact", lines=[stripped], start_line=index)
            sections.append(current)
        else:
            current.lines.append(stripped)

    return sections


def parse_resume(text: str, vocabulary: Vocabulary = DEFAULT_VOCABULARY) -> ResumeContent:
    """Parse raw resume text into a ResumeContent.

    Never raises on malformed content; missing structure yields empty fields.
    """
    if not isinstance(text, str):
        raise InputError(f"Resume text must be a string, got {type(text).__name__}")
    if not text.strip():
        return ResumeContent(raw_text=text)

    sections = detect_sections(text)

    def lines_of(section_type: str) -> list[str]:
        return [line for s in sections if s.section_type == section_type for line in s.lines]

    contact_lines = lines_of("contact")
    contact_info = extract_contact_info(contact_lines)
    has_summary_heading = any(s.section_type == "summary" for s in sections)
    if has_summary_heading:
        summary = "\n".join(lines_of("summary")) or None
    else:
        summary = _implicit_summary(contact_lines, contact_info)

    skills = parse_skills(lines_of("skills"))
    if not any(s.section_type == "skills" for s in sections):
        # No skills heading: fall back to known terms mentioned anywhere
        skills = [t for t in find_terms(text, vocabulary.skill_terms) if len(t) > 2]

    parsed = ResumeContent(
        raw_text=text,
        sections=ResumeSections(
            contact_info=contact_info,
            summary=summary,
            experience=parse_experience(lines_of("experience")),
            education=parse_education(lines_of("education")),
            skills=skills,
            certifications=_dedupe(strip_bullet(line) for line in lines_of("certifications")),
        ),
    )
    logger.debug(
        "Parsed resume: %d sections, %d experience entries, %d skills",
        len(sections), len(parsed.sections.experience), len(parsed.sections.skills),
    )
    return parsed


# ---------------------------------------------------------------------------
# Contact and summary
# ---------------------------------------------------------------------------

def _has_contact_data(line: str) -> bool:
    return bool(EMAIL_RE.search(line) or PHONE_RE.search(line) or LINKEDIN_RE.search(line))


def extract_contact_info(lines: list[str]) -> ContactInfo:
    """Scan header lines for name, email, phone and LinkedIn; first match wins."""
    name = email = phone = linkedin = None
    for line in lines:
        if email is None and (m := EMAIL_RE.search(line)):
            email = m.group()
        if phone is None and (m := PHONE_RE.search(line)):
            phone = m.group().strip()
        if linkedin is None and (m := LINKEDIN_RE.search(line)):
            linkedin = m.group()
        if name is None and not _has_contact_data(line) and "/" not in line:
            if m := NAME_RE.search(line):
                name = m.group(1)
    return ContactInfo(name=name, email=email, phone=phone, linkedin=linkedin)


def _implicit_summary(lines: list[str], contact: ContactInfo) -> str | None:
    summary_lines = [
        line for line in lines
        if len(line.split()) >= SUMMARY_MIN_WORDS
        and not _has_contact_data(line)
        and line != contact.name
    ]
    return " ".join(summary_lines) or None


# ---------------------------------------------------------------------------
# Experience
# ---------------------------------------------------------------------------

def _is_date_only(line: str) -> bool:
    cleaned = line.strip().strip("()[]").strip()
    match = DATE_RANGE_RE.fullmatch(cleaned)
    return match is not None


def looks_like_job_header(line: str) -> bool:
    """Short, unpunctuated line with dates or a position/company separator."""
    if len(line) >= _MAX_HEADER_LENGTH or line.endswith(".") or is_bullet(line):
        return False
    if len(line.split()) > _MAX_HEADER_WORDS:
        return False
    if DATE_RANGE_RE.search(line):
        return True
    if not (YEAR_RE.search(line) or any(sep in line for sep in HEADER_SEPARATORS)):
        return False
    # Years and separators alone are common in prose; require a title-cased line
    words = [w for w in line.split() if w[0].isalpha()]
    capitalized = sum(1 for w in words if w[0].isupper())
    return bool(words) and capitalized / len(words) >= 0.5


def parse_job_header(line: str) -> dict[str, str]:
    """Split a job header into position, company and dates."""
    start_date = end_date = ""
    match = DATE_RANGE_RE.search(line)
    if match:
        start_date, end_date = match.group(1).strip(), match.group(2).strip()
        line = line[: match.start()] + line[match.end():]
    else:
        year = YEAR_RE.search(line)
        if year:
            start_date = year.group()
            line = line[: year.start()] + line[year.end():]

    line = _PARENS_RE.sub("", line).strip(" \t|,-–—@")
    parts = [line]
    for sep in HEADER_SEPARATORS:
        if sep in line:
            parts = [p.strip(" \t|,-–—") for p in line.split(sep)]
            break
    parts = [p for p in parts if p]

    return {
        "position": parts[0] if parts else "",
        "company": parts[1] if len(parts) > 1 else "Unknown",
        "start_date": start_date,
        "end_date": end_date,
    }


def parse_experience(lines: list[str]) -> list[ExperienceEntry]:
    """Group experience lines into entries: header, description, achievements."""
    entries: list[dict] = []
    current: dict | None = None

    def open_entry(header: dict[str, str]) -> dict:
        entry = {**header, "description": [], "achievements": []}
        entries.append(entry)
        return entry

    for line in lines:
        if is_bullet(line):
            if current is None:
                current = open_entry(parse_job_header(""))
            achievement = strip_bullet(line)
            if achievement:
                current["achievements"].append(achievement)
        elif _is_date_only(line) and current is not None and not current["start_date"]:
            match = DATE_RANGE_RE.search(line)
            current["start_date"], current["end_date"] = match.group(1), match.group(2)
        elif looks_like_job_header(line):
            current = open_entry(parse_job_header(line))
        else:
            if current is None:
                current = open_entry(parse_job_header(""))
            current["description"].append(line)

    return [
        ExperienceEntry(
            company=e["company"],
            position=e["position"],
            start_date=e["start_date"],
            end_date=e["end_date"],
            description="\n".join(e["description"]),
            achievements=e["achievements"],
        )
        for e in entries
    ]


# ---------------------------------------------------------------------------
# Education
# ---------------------------------------------------------------------------

def parse_education_line(line: str) -> EducationEntry:
    years = YEAR_RE.findall(line)
    graduation_date = years[-1] if years else None
    cleaned = _PARENS_RE.sub("", YEAR_RE.sub("", strip_bullet(line))).strip(" \t,-–|")

    parts = [p.strip(" \t,-–|") for p in _EDUCATION_SPLIT_RE.split(cleaned)]
    parts = [p for p in parts if p]
    degree = parts[0] if parts else cleaned
    institution = parts[1] if len(parts) > 1 else ""

    field = ""
    field_match = _FIELD_RE.search(degree)
    if field_match:
        field = field_match.group(1).strip()
        degree = degree[: field_match.start()].strip()

    return EducationEntry(
        institution=institution, degree=degree, field=field, graduation_date=graduation_date
    )


def parse_education(lines: list[str]) -> list[EducationEntry]:
    """Lines naming a degree open an entry; a following institution line fills the gap."""
    entries: list[EducationEntry] = []
    for line in lines:
        if DEGREE_RE.search(line):
            entries.append(parse_education_line(line))
        elif entries and not entries[-1].institution and INSTITUTION_RE.search(line):
            previous = entries[-1]
            years = YEAR_RE.findall(line)
            institution = _PARENS_RE.sub("", YEAR_RE.sub("", strip_bullet(line))).strip(" \t,-–|")
            entries[-1] = previous.model_copy(update={
                "institution": institution,
                "graduation_date": previous.graduation_date or (years[-1] if years else None),
            })
    return entries


# ---------------------------------------------------------------------------
# Skills and certifications
# ---------------------------------------------------------------------------

def _dedupe(items) -> list[str]:
    seen: set[str] = set()
    result: list[str] = []
    for item in items:
        item = item.strip()
        if item and item.lower() not in seen:
            seen.add(item.lower())
            result.append(item)
    return result


def parse_skills(lines: list[str]) -> list[str]:
    """Split skill lines on , ; | and bullets, dropping "Category:" prefixes."""
    skills: list[str] = []
    for line in lines:
        line = strip_bullet(line)
        if ":" in line:
            line = line.split(":", 1)[1]
        skills.extend(
            s.strip() for s in SKILL_SPLIT_RE.split(line)
            if 0 < len(s.strip()) < _MAX_SKILL_LENGTH
        )
    return _dedupe(skills)

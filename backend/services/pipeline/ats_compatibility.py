"""ATS structural analyzer: formatting, organization, readability, presentation.

Each sub-check starts at 100 and deducts for every problem it finds. The
overall score is the weighted sum of the four sub-scores and feeds the
``structure`` category.
"""

import logging
import math
import re
from dataclasses import dataclass, field

from models.schemas.analyses import ATSCompatibilityResult, ATSIssue, ATSSuggestion
from models.schemas.job_requirements import JobRequirements
from models.schemas.resume_content import ParsedSection, ResumeContent
from services.pipeline.base import BaseAnalyzer, round_half_up
from services.section_parser import detect_sections
from services.text_utils import BULLET_MARKERS, word_count

logger = logging.getLogger(__name__)

SUBSCORE_WEIGHTS = {
    "formatting": 0.30,
    "organization": 0.30,
    "readability": 0.25,
    "presentation": 0.15,
}

REQUIRED_SECTIONS = ("contact", "experience", "education", "skills")
RECOMMENDED_SECTIONS = ("summary", "certifications")

WORDS_PER_PAGE = 250
MAX_PAGES = 2
MIN_WHITE_SPACE_RATIO = 0.1
MIN_ENTRY_TEXT_LENGTH = 50
MAX_LINE_LENGTH = 100
LONG_LINE_SHARE = 0.3
COMPLEX_FORMATTING_LIMIT = 5
NON_STANDARD_LIMIT = 5
MAX_SKILLS = 15

COMPLEX_FORMATTING_PATTERNS = (
    re.compile(r"\t+"),
    re.compile(r" {4,}"),
    re.compile(r"[│┌┐└┘├┤┬┴┼─═║]"),
    re.compile(r"[▪▫■□●○◆◇►▸▹]"),
)
# Common typographic characters are fine; anything else outside ASCII is counted
NON_STANDARD_RE = re.compile(r"[^\x00-\x7F•–—‘’“”é]")
_NUMBERED_BULLET_RE = re.compile(r"^\d{1,2}[.)]\s")

UNPROFESSIONAL_EMAIL_PATTERNS = (
    re.compile(r"\d{4,}"),
    re.compile(r"sexy|hot|cool|awesome|ninja|rockstar|guru", re.IGNORECASE),
    re.compile(r"[._]{2,}"),
    re.compile(r"@(?:yahoo|hotmail|aol)\.", re.IGNORECASE),
)

DATE_FORMATS = (
    ("year", re.compile(r"^\d{4}$")),
    ("month/year", re.compile(r"^\d{1,2}/\d{4}$")),
    ("month year", re.compile(r"^[A-Za-z]+\.?\s+\d{4}$")),
)


@dataclass
class _SubCheck:
    category: str
    score: int = 100
    issues: list[ATSIssue] = field(default_factory=list)
    suggestions: list[ATSSuggestion] = field(default_factory=list)

    def deduct(self, points: int) -> None:
        self.score = max(0, self.score - points)

    def issue(self, severity: str, description: str, impact: str) -> None:
        self.issues.append(ATSIssue(
            category=self.category, severity=severity, description=description, impact=impact,
        ))

    def suggest(self, priority: str, title: str, description: str, example: str | None = None,
                blocking: bool = False) -> None:
        self.suggestions.append(ATSSuggestion(
            category=self.category, priority=priority, title=title,
            description=description, example=example, blocking=blocking,
        ))


class ATSCompatibilityAnalyzer(BaseAnalyzer[ATSCompatibilityResult]):
    name = "ats_compatibility"

    def fallback(self) -> ATSCompatibilityResult:
        return ATSCompatibilityResult()

    def analyze(self, content: ResumeContent, requirements: JobRequirements | None = None) -> ATSCompatibilityResult:
        sections = detect_sections(content.raw_text)
        checks = [
            self.check_formatting(content),
            self.check_organization(content, sections),
            self.check_readability(content),
            self.check_presentation(content),
        ]
        scores = {c.category: c.score for c in checks}
        overall = round_half_up(sum(SUBSCORE_WEIGHTS[name] * score for name, score in scores.items()))

        return ATSCompatibilityResult(
            score=max(0, min(100, overall)),
            formatting_score=scores["formatting"],
            organization_score=scores["organization"],
            readability_score=scores["readability"],
            presentation_score=scores["presentation"],
            issues=[i for c in checks for i in c.issues],
            suggestions=[s for c in checks for s in c.suggestions],
        )

    # ------------------------------------------------------------------
    # Sub-checks
    # ------------------------------------------------------------------

    def check_formatting(self, content: ResumeContent) -> _SubCheck:
        check = _SubCheck("formatting")
        text = content.raw_text

        complex_count = sum(len(p.findall(text)) for p in COMPLEX_FORMATTING_PATTERNS)
        if complex_count > COMPLEX_FORMATTING_LIMIT:
            check.deduct(20)
            check.issue("high", "Complex formatting detected that may not be ATS-friendly",
                        "ATS systems may not parse content correctly, leading to missed keywords")
            check.suggest("high", "Simplify Formatting",
                          "Use simple formatting with standard bullets (- or •) and avoid tables, "
                          "columns and box characters",
                          "Replace special characters with standard bullets: • instead of ▪",
                          blocking=True)

        if len(NON_STANDARD_RE.findall(text)) > NON_STANDARD_LIMIT:
            check.deduct(10)
            check.issue("medium", "Non-standard characters detected",
                        "May cause parsing issues in some ATS systems")
            check.suggest("medium", "Use Standard Characters",
                          "Replace special characters with standard ASCII equivalents",
                          'Use standard quotes " instead of decorative symbols')

        bullet_styles = set()
        for line in text.split("\n"):
            stripped = line.strip()
            if stripped and stripped[0] in BULLET_MARKERS and (len(stripped) == 1 or stripped[1] in " \t"):
                bullet_styles.add(stripped[0])
            elif _NUMBERED_BULLET_RE.match(stripped):
                bullet_styles.add("numbered")
        if len(bullet_styles) > 1:
            check.deduct(5)
            check.issue("low", "Inconsistent bullet point formatting",
                        "May appear unprofessional and reduce readability")
            check.suggest("low", "Standardize Bullet Points",
                          "Use consistent bullet points throughout the resume",
                          "Use • for all bullet points instead of mixing •, -, and *")

        lines = [line for line in text.split("\n") if line.strip()]
        long_lines = [line for line in lines if len(line) > MAX_LINE_LENGTH]
        if lines and len(long_lines) > len(lines) * LONG_LINE_SHARE:
            check.deduct(10)
            check.issue("medium", "Many lines exceed recommended length",
                        "May cause formatting issues when parsed by ATS")
            check.suggest("medium", "Optimize Line Length",
                          f"Keep lines under {MAX_LINE_LENGTH} characters for better ATS parsing",
                          "Break long sentences into multiple lines or bullet points")
        return check

    def check_organization(self, content: ResumeContent, sections: list[ParsedSection]) -> _SubCheck:
        check = _SubCheck("organization")
        present = [s.section_type for s in sections]
        contact = content.sections.contact_info

        missing = [s for s in REQUIRED_SECTIONS if s not in present]
        if missing:
            check.deduct(25 * len(missing))
            check.issue("high", f"Missing required sections: {', '.join(missing)}",
                        "ATS may not find key information, reducing match scores")
            check.suggest("high", "Add Missing Sections",
                          f"Include all required sections: {', '.join(missing)}",
                          'Add a "Skills" section with relevant technical and soft skills',
                          blocking=True)

        missing_recommended = [
            s for s in RECOMMENDED_SECTIONS
            if s not in present and not (s == "summary" and content.sections.summary)
        ]
        if missing_recommended:
            check.deduct(5 * len(missing_recommended))
            check.suggest("medium", "Consider Adding Recommended Sections",
                          f"Consider adding: {', '.join(missing_recommended)}",
                          'Add a "Summary" section to highlight key qualifications')

        if present and present[0] != "contact":
            check.deduct(10)
            check.issue("medium", "Contact information is not at the top of the resume",
                        "ATS may have difficulty locating contact information")
            check.suggest("medium", "Move Contact Information to Top",
                          "Place contact information at the very beginning of your resume",
                          "Start with: Name, Phone, Email, LinkedIn, Location")

        if "experience" in present and present.index("experience") > 2:
            check.deduct(5)
            check.suggest("low", "Consider Moving Experience Section Earlier",
                          "Place work experience near the top after contact info and summary",
                          "Order: Contact, Summary, Experience, Education, Skills")

        if not contact.name:
            check.deduct(15)
            check.issue("high", "Name not found in contact information",
                        "ATS cannot identify the candidate")
            check.suggest("high", "Add Your Name",
                          "Ensure your full name is clearly visible at the top of the resume",
                          "John Smith (as the first line of your resume)",
                          blocking=True)

        if not contact.email:
            check.deduct(15)
            check.issue("high", "Email address not found", "Recruiters cannot contact you")
            check.suggest("high", "Add Email Address",
                          "Include a professional email address in your contact information",
                          "john.smith@email.com")

        if not content.sections.experience:
            check.deduct(20)
            check.issue("high", "No work experience found", "ATS cannot assess relevant experience")
            check.suggest("high", "Add Work Experience",
                          "Include relevant work experience with job titles, companies, and dates",
                          "Software Developer at Tech Company (2020 - 2023)",
                          blocking=True)
        return check

    def check_readability(self, content: ResumeContent) -> _SubCheck:
        check = _SubCheck("readability")
        text = content.raw_text

        words = word_count(text)
        pages = words / WORDS_PER_PAGE
        if pages > MAX_PAGES:
            check.deduct(15)
            check.issue("medium",
                        f"Resume appears to be {math.ceil(pages)} pages, exceeding recommended {MAX_PAGES} pages",
                        "May overwhelm recruiters and ATS systems")
            check.suggest("medium", "Reduce Resume Length",
                          f"Trim content to fit within {MAX_PAGES} pages",
                          "Focus on most recent and relevant experience, remove outdated skills")

        lines = text.split("\n")
        if words and sum(1 for line in lines if not line.strip()) / len(lines) < MIN_WHITE_SPACE_RATIO:
            check.deduct(10)
            check.issue("medium", "Insufficient white space detected",
                        "Dense text is harder to read and may appear cluttered")
            check.suggest("medium", "Add White Space",
                          "Add blank lines between sections and entries for better readability",
                          "Leave a blank line between each job entry")

        thin = [
            e for e in content.sections.experience
            if len(e.description) + sum(len(a) for a in e.achievements) < MIN_ENTRY_TEXT_LENGTH
        ]
        if thin:
            check.deduct(5 * len(thin))
            check.issue("medium", f"{len(thin)} job(s) have insufficient description",
                        "ATS may not find enough keywords to match job requirements")
            check.suggest("medium", "Expand Job Descriptions",
                          "Provide detailed descriptions for each role with specific achievements",
                          "Add 2-4 bullet points describing key responsibilities and accomplishments")
        return check

    def check_presentation(self, content: ResumeContent) -> _SubCheck:
        check = _SubCheck("presentation")
        sections = content.sections
        contact = sections.contact_info

        if contact.email and any(p.search(contact.email) for p in UNPROFESSIONAL_EMAIL_PATTERNS):
            check.deduct(15)
            check.issue("medium", "Email address may appear unprofessional",
                        "May create negative first impression with recruiters")
            check.suggest("medium", "Use Professional Email",
                          "Use a simple, professional email format",
                          "firstname.lastname@gmail.com")

        dates = [d for e in sections.experience for d in (e.start_date, e.end_date) if d]
        dates += [e.graduation_date for e in sections.education if e.graduation_date]
        formats = {name for d in dates for name, pattern in DATE_FORMATS if pattern.match(d)}
        if len(formats) > 1:
            check.deduct(5)
            check.issue("low", "Inconsistent date formatting",
                        "May appear careless and reduce professional appearance")
            check.suggest("low", "Standardize Date Format",
                          "Use consistent date format throughout the resume",
                          "Use MM/YYYY format: 01/2020 - 12/2022")

        names = [contact.name] + [e.position for e in sections.experience]
        names += [e.company for e in sections.experience if e.company != "Unknown"]
        names += [e.degree for e in sections.education] + [e.institution for e in sections.education]
        bad_case = sum(
            1 for n in names if n and (
                (n == n.upper() and len(n) > 5 and n != n.lower())
                or (n == n.lower() and len(n) > 3 and n != n.upper())
            )
        )
        if bad_case:
            check.deduct(3 * bad_case)
            check.issue("low", "Inappropriate capitalization detected", "May appear unprofessional")
            check.suggest("low", "Fix Capitalization",
                          "Use proper title case for names, positions, and institutions",
                          "Software Developer instead of SOFTWARE DEVELOPER or software developer")

        if len(sections.skills) > MAX_SKILLS:
            check.deduct(5)
            check.suggest("low", "Organize Skills Section",
                          "Group skills by category (Technical, Languages, etc.) for better presentation",
                          "Technical Skills: JavaScript, Python, React\nLanguages: English, Spanish")

        if not contact.linkedin:
            check.deduct(5)
            check.suggest("low", "Add LinkedIn Profile",
                          "Include your LinkedIn profile URL in contact information",
                          "linkedin.com/in/yourname")
        return check

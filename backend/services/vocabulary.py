"""Read-only word lists shared by the parser, extractor and analyzers.

Everything here is immutable. Components take a ``Vocabulary`` argument that
defaults to ``DEFAULT_VOCABULARY``; tests and callers can build their own
instance with ``dataclasses.replace`` instead of patching module state.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

# ---------------------------------------------------------------------------
# Skills recognized in job descriptions (lower-case, matched on term boundaries)
# ---------------------------------------------------------------------------
SKILL_TERMS: tuple[str, ...] = (
    # Programming languages
    "javascript", "typescript", "python", "java", "c++", "c#", "php", "ruby",
    "go", "golang", "rust", "swift", "kotlin", "scala", "r", "matlab", "sql",
    "html", "css", "bash",
    # Frameworks and libraries
    "react", "angular", "vue", "node.js", "express", "django", "flask",
    "fastapi", "spring", "laravel", "rails", "asp.net", ".net", "jquery",
    "bootstrap", "tailwind", "graphql", "rest",
    # Databases
    "mysql", "postgresql", "mongodb", "redis", "elasticsearch", "oracle",
    "sqlite", "dynamodb", "cassandra",
    # Cloud and DevOps
    "aws", "azure", "gcp", "docker", "kubernetes", "jenkins", "git", "github",
    "gitlab", "terraform", "ansible", "chef", "puppet", "ci/cd", "linux",
    # Data
    "machine learning", "data analysis", "pandas", "spark", "hadoop", "tableau",
    "power bi", "excel",
    # Soft skills
    "leadership", "communication", "teamwork", "problem-solving", "analytical",
    "creative", "adaptable", "organized", "detail-oriented", "time-management",
    "collaboration", "mentoring",
    # Business and process
    "project management", "agile", "scrum", "kanban", "waterfall", "lean",
    "six sigma", "artificial intelligence", "blockchain",
)

# ---------------------------------------------------------------------------
# Action verbs (base forms; inflections are resolved by text_utils.verb_forms)
# ---------------------------------------------------------------------------
STRONG_VERBS: frozenset[str] = frozenset({
    "accelerate", "accomplish", "achieve", "administer", "advance", "analyze",
    "architect", "automate", "build", "built", "consolidate", "coordinate",
    "create", "cut", "decrease", "deliver", "deploy", "design", "develop",
    "direct", "drive", "drove", "eliminate", "engineer", "enhance",
    "establish", "execute", "expand", "generate", "grew", "grow", "implement",
    "improve", "increase", "initiate", "innovate", "integrate", "launch",
    "lead", "led", "manage", "mentor", "migrate", "modernize", "negotiate",
    "optimize", "orchestrate", "overhaul", "pioneer", "produce", "redesign",
    "reduce", "refactor", "resolve", "restructure", "revamp", "save", "scale",
    "secure", "simplify", "spearhead", "standardize", "streamline",
    "strengthen", "supervise", "surpass", "train", "transform", "upgrade",
    "won", "win",
})

WEAK_VERBS: frozenset[str] = frozenset({
    "assist", "deal", "dealt", "did", "do", "handle", "help", "involve",
    "made", "make", "participate", "use", "utilize", "work",
})

WEAK_VERB_REPLACEMENTS: Mapping[str, tuple[str, ...]] = MappingProxyType({
    "did": ("delivered", "executed", "accomplished", "achieved"),
    "do": ("deliver", "execute", "accomplish"),
    "made": ("created", "developed", "built", "produced"),
    "make": ("create", "develop", "build"),
    "work": ("collaborated", "contributed", "engineered"),
    "help": ("enabled", "facilitated", "supported"),
    "assist": ("supported", "enabled", "facilitated"),
    "participate": ("contributed", "collaborated", "drove"),
    "involve": ("contributed", "drove", "led"),
    "handle": ("managed", "resolved", "processed"),
    "deal": ("resolved", "negotiated", "managed"),
    "dealt": ("resolved", "negotiated", "managed"),
    "use": ("leveraged", "applied", "implemented"),
    "utilize": ("leveraged", "applied", "implemented"),
})

DEFAULT_REPLACEMENTS: tuple[str, ...] = ("delivered", "implemented", "led")

LEADERSHIP_VERBS: tuple[str, ...] = ("led", "managed", "supervised", "directed", "coordinated", "mentored")

# ---------------------------------------------------------------------------
# Clarity, impact and tone
# ---------------------------------------------------------------------------
IMPACT_WORDS: tuple[str, ...] = (
    "increased", "improved", "reduced", "saved", "generated", "achieved",
    "exceeded", "delivered", "launched", "created", "grew", "accelerated",
)

PRECISE_WORDS: tuple[str, ...] = (
    "specifically", "precisely", "directly", "successfully", "effectively",
    "efficiently", "systematically", "strategically", "proactively",
)

VAGUE_WORDS: tuple[str, ...] = (
    "various", "multiple", "several", "numerous", "stuff", "things", "etc",
    "and so on", "among others", "responsible for", "duties included",
)

PASSIVE_MARKERS: tuple[str, ...] = ("was", "were", "been", "being")

TONE_POSITIVE: frozenset[str] = frozenset({
    "achieved", "award", "awarded", "best", "excellent", "exceeded",
    "improved", "innovative", "outstanding", "recognized", "success",
    "successful", "successfully", "top", "won",
})

TONE_NEGATIVE: frozenset[str] = frozenset({
    "failed", "failure", "fired", "lost", "poor", "problem", "problems",
    "struggled", "terminated", "unable", "weak",
})

# ---------------------------------------------------------------------------
# Job-description vocabulary
# ---------------------------------------------------------------------------
EDUCATION_TERMS: tuple[str, ...] = (
    "bachelor", "bachelors", "bs", "ba", "bsc", "beng",
    "master", "masters", "ms", "ma", "msc", "meng", "mba",
    "phd", "doctorate", "doctoral",
    "associate", "diploma", "certificate",
    "computer science", "engineering", "mathematics", "physics",
    "business", "marketing", "finance", "accounting",
)

CERTIFICATION_TERMS: tuple[str, ...] = (
    "aws certified", "azure certified", "google cloud certified",
    "pmp", "scrum master", "cissp", "cisa", "cism", "comptia", "ccna",
    "microsoft certified", "oracle certified", "salesforce certified",
    "tableau certified", "cka",
)

BENEFIT_TERMS: tuple[str, ...] = (
    "health insurance", "dental", "vision", "401k", "retirement", "vacation",
    "pto", "paid time off", "flexible schedule", "remote work",
    "work from home", "stock options", "equity", "bonus", "gym membership",
    "learning budget", "conference",
)

# Scanned in order; the first word-boundary hit wins.
EXPERIENCE_LEVELS: tuple[tuple[str, str], ...] = (
    ("entry", "entry-level"),
    ("junior", "entry-level"),
    ("associate", "entry-level"),
    ("mid", "mid-level"),
    ("intermediate", "mid-level"),
    ("senior", "senior-level"),
    ("lead", "senior-level"),
    ("principal", "senior-level"),
    ("staff", "senior-level"),
    ("manager", "management"),
    ("director", "management"),
    ("vp", "executive"),
    ("vice president", "executive"),
    ("cto", "executive"),
    ("ceo", "executive"),
)

REQUIRED_INDICATORS: tuple[str, ...] = (
    "required", "must have", "must-have", "essential", "mandatory",
    "necessary", "minimum", "at least",
)

PREFERRED_INDICATORS: tuple[str, ...] = (
    "preferred", "nice to have", "nice-to-have", "bonus", "a plus",
    "advantage", "desirable", "ideally",
)

# Common English function words plus JD boilerplate that never makes a useful keyword
STOPWORDS: frozenset[str] = frozenset({
    "the", "and", "or", "but", "in", "on", "at", "to", "for", "of", "with",
    "by", "a", "an", "as", "is", "are", "be", "been", "was", "were", "will",
    "can", "may", "must", "should", "would", "could", "this", "that", "these",
    "those", "from", "into", "our", "you", "your", "we", "us", "they", "their",
    "it", "its", "who", "what", "which", "when", "where", "how", "all", "any",
    "each", "other", "some", "such", "than", "then", "also", "more", "most",
    "not", "have", "has", "had", "do", "does", "about", "across", "within",
    "including", "etc", "plus", "well", "new", "able", "per", "via",
    # JD boilerplate
    "opportunity", "position", "role", "candidate", "candidates", "company",
    "team", "teams", "job", "work", "working", "year", "years", "experience",
    "required", "preferred", "requirements", "qualifications",
    "responsibilities", "strong", "good", "great", "excellent", "ideal",
    "join", "looking", "seeking", "knowledge", "understanding", "ability",
    "skills", "skill", "benefits", "salary", "e.g", "i.e", "based", "related",
    "like", "using", "use", "make", "get", "one", "two", "three",
})


@dataclass(frozen=True)
class Vocabulary:
    """Immutable bundle of every word list the pipeline consults."""

    skill_terms: tuple[str, ...] = SKILL_TERMS
    strong_verbs: frozenset[str] = STRONG_VERBS
    weak_verbs: frozenset[str] = WEAK_VERBS
    weak_verb_replacements: Mapping[str, tuple[str, ...]] = field(
        default_factory=lambda: WEAK_VERB_REPLACEMENTS
    )
    default_replacements: tuple[str, ...] = DEFAULT_REPLACEMENTS
    leadership_verbs: tuple[str, ...] = LEADERSHIP_VERBS
    impact_words: tuple[str, ...] = IMPACT_WORDS
    precise_words: tuple[str, ...] = PRECISE_WORDS
    vague_words: tuple[str, ...] = VAGUE_WORDS
    passive_markers: tuple[str, ...] = PASSIVE_MARKERS
    tone_positive: frozenset[str] = TONE_POSITIVE
    tone_negative: frozenset[str] = TONE_NEGATIVE
    education_terms: tuple[str, ...] = EDUCATION_TERMS
    certification_terms: tuple[str, ...] = CERTIFICATION_TERMS
    benefit_terms: tuple[str, ...] = BENEFIT_TERMS
    experience_levels: tuple[tuple[str, str], ...] = EXPERIENCE_LEVELS
    required_indicators: tuple[str, ...] = REQUIRED_INDICATORS
    preferred_indicators: tuple[str, ...] = PREFERRED_INDICATORS
    stopwords: frozenset[str] = STOPWORDS

    def replacements_for(self, weak_verb: str) -> tuple[str, ...]:
        return self.weak_verb_replacements.get(weak_verb, self.default_replacements)


DEFAULT_VOCABULARY = Vocabulary()

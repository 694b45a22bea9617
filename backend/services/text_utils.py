"""Line, sentence and word helpers shared by the parser and analyzers."""

import re

from nltk.tokenize import RegexpTokenizer

# Bullet markers: standard + expanded unicode set
BULLET_MARKERS = frozenset("•-–—►▪✓*○◆⚫→▸▹◇■□●·")

_NUMBERED_RE = re.compile(r"^\d{1,2}[.)]\s+")

# Words start with a letter; keep tech punctuation such as node.js, c++, c#, ci/cd
_WORD_TOKENIZER = RegexpTokenizer(r"[A-Za-z][A-Za-z0-9+#'.\-/]*")
_TRAILING_PUNCT = ".,'-/"

# Sentence ends: terminal punctuation followed by whitespace/end, or a line break
_SENTENCE_SPLIT_RE = re.compile(r"[.!?]+(?=\s|$)|\n+")


def is_bullet(line: str) -> bool:
    """True for lines that start with a bullet glyph or an ``N.``/``N)`` prefix."""
    stripped = line.strip()
    if not stripped:
        return False
    if stripped[0] in BULLET_MARKERS:
        # "-" on its own or a dash range ("- 2020") still counts as a list marker
        return len(stripped) == 1 or stripped[1] in " \t" or stripped[0] not in "-–—"
    return bool(_NUMBERED_RE.match(stripped))


def strip_bullet(line: str) -> str:
    """Remove a leading list marker and surrounding whitespace."""
    stripped = line.strip()
    if stripped and stripped[0] in BULLET_MARKERS:
        return stripped.lstrip("".join(BULLET_MARKERS) + " \t").strip()
    return _NUMBERED_RE.sub("", stripped).strip()


def extract_bullets(text: str) -> list[str]:
    """Extract bullet-point lines from resume text."""
    bullets = []
    for line in text.split("\n"):
        if is_bullet(line):
            cleaned = strip_bullet(line)
            if cleaned:
                bullets.append(cleaned)
    return bullets


def tokenize_words(text: str) -> list[str]:
    """Split text into word tokens, dropping trailing punctuation."""
    tokens = []
    for token in _WORD_TOKENIZER.tokenize(text):
        token = token.rstrip(_TRAILING_PUNCT)
        if token:
            tokens.append(token)
    return tokens


def split_sentences(text: str) -> list[str]:
    """Split text on sentence punctuation and line breaks; bullets are stripped."""
    sentences = []
    for piece in _SENTENCE_SPLIT_RE.split(text):
        cleaned = strip_bullet(piece)
        if cleaned:
            sentences.append(cleaned)
    return sentences


def verb_forms(token: str) -> list[str]:
    """Candidate base forms of a word: itself, then -ed/-ing/-s stripped.

    ``e`` is restored after stripping (``increased`` -> ``increase``,
    ``managing`` -> ``manage``) and a bare ``-d`` is tried for ``used`` style
    past tenses.
    """
    word = token.lower()
    forms = [word]
    if word.endswith("ed") and len(word) > 4:
        forms += [word[:-2], word[:-1]]
        if len(word) > 5 and word[-3] == word[-4]:
            forms.append(word[:-3])  # planned -> plan
    elif word.endswith("ing") and len(word) > 5:
        forms += [word[:-3], word[:-3] + "e"]
        if word[-4] == word[-5]:
            forms.append(word[:-4])  # running -> run
    elif word.endswith("ies") and len(word) > 4:
        forms.append(word[:-3] + "y")
    elif word.endswith("s") and not word.endswith("ss") and len(word) > 3:
        forms.append(word[:-1])
    elif word.endswith("d") and len(word) > 3:
        forms.append(word[:-1])
    return forms


def normalize_verb(token: str, *lexicons: frozenset[str]) -> str:
    """Return the first form of ``token`` found in any lexicon, else its stripped stem."""
    forms = verb_forms(token)
    for form in forms:
        for lexicon in lexicons:
            if form in lexicon:
                return form
    return forms[1] if len(forms) > 1 else forms[0]


def word_count(text: str) -> int:
    return len(text.split())


def term_pattern(term: str) -> re.Pattern:
    """Case-insensitive pattern for ``term`` bounded by non-alphanumerics.

    Plain ``\\b`` breaks on terms that start or end with punctuation
    (``c++``, ``.net``, ``node.js``).
    """
    return re.compile(rf"(?<![a-z0-9]){re.escape(term.lower())}(?![a-z0-9])", re.IGNORECASE)


def find_terms(text: str, terms: tuple[str, ...] | list[str]) -> list[str]:
    """Terms that occur in ``text``, in ``terms`` order, without duplicates."""
    found: list[str] = []
    for term in terms:
        if term not in found and term_pattern(term).search(text):
            found.append(term)
    return found

import random
import re

_NON_WORD_CHARS = re.compile(r"[^A-Za-z\s'-]")
_ENGLISH_WORD = re.compile(r"^[A-Za-z]+([-'][A-Za-z]+)*('s)?$")
_LATIN_SENTENCE = re.compile(r"^[A-Za-z\s.,!?]+$")
_CHINESE_CHAR = re.compile(r"[一-龥]")
_ENGLISH_RUN = re.compile(r"[A-Za-z]+")

MIN_WORDS = 3
SAMPLE_SIZE = 3


def is_english(text: str, rng: random.Random | None = None) -> bool:
    """
    Guess whether a reply is English by spot-checking a few random words.

    Characters other than ASCII letters, whitespace, hyphens and apostrophes
    are dropped first, so Chinese text leaves too few words and fails. The
    sample is drawn with replacement, which makes the result vary between
    calls on mixed text.
    """
    rng = rng or random
    words = _NON_WORD_CHARS.sub("", text or "").split()
    if len(words) < MIN_WORDS:
        return False

    sample = [rng.choice(words) for _ in range(min(SAMPLE_SIZE, len(words)))]
    return all(_ENGLISH_WORD.match(word) for word in sample)


def is_latin_sentence(text: str) -> bool:
    """True when the text holds only Latin letters and basic punctuation."""
    return bool(_LATIN_SENTENCE.match((text or "").strip()))


def count_languages(text: str) -> tuple[int, int]:
    """Return (Chinese characters, English words)."""
    text = text or ""
    return len(_CHINESE_CHAR.findall(text)), len(_ENGLISH_RUN.findall(text))

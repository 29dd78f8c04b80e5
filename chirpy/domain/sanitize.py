"""
Chirp moderation.

Masks blocklisted words in user-submitted chirp bodies.

Key behaviors:
- Text is split on the single-space character only; every other character
  (tabs, newlines, punctuation) belongs to a word
- A word is masked when its lower-cased form equals a blocklisted word exactly
- "kerfuffle!" is NOT masked: attached punctuation makes it a different word
- Runs of spaces yield empty words that are kept, so the output has the same
  word count and the same separators as the input
"""

MAX_CHIRP_LENGTH = 140

BLOCKLIST: frozenset[str] = frozenset({"kerfuffle", "sharbert", "fornax"})

MASK = "****"

SEPARATOR = " "


def sanitize_chirp(text: str) -> str:
    """Replace blocklisted words in text with MASK."""
    words = text.split(SEPARATOR)
    cleaned = [MASK if word.lower() in BLOCKLIST else word for word in words]
    return SEPARATOR.join(cleaned)


def is_chirp_too_long(text: str) -> bool:
    # Characters, not bytes.
    return len(text) > MAX_CHIRP_LENGTH

"""Character classes and thresholds shared by every estimator operation.

Counting, slicing and chunking must segment text identically, so the
patterns live in one place and are compiled once at import time.
"""

from __future__ import annotations

import re

# Punctuation set (no letters or digits). Hyphen stays last inside the class.
PUNCTUATION_CHARS = r".,!?;(){}\[\]<>:/\\|@#$%^&*+=`~_-"

WHITESPACE_PATTERN = re.compile(r"\s+")
PUNCTUATION_PATTERN = re.compile(f"[{PUNCTUATION_CHARS}]+")

CJK_PATTERN = re.compile(
    "["
    "\u4e00-\u9fff"  # CJK Unified Ideographs
    "\u3400-\u4dbf"  # Extension A
    "\u3000-\u303f"  # CJK Symbols and Punctuation
    "\uff00-\uffef"  # Half/full-width forms
    "\u3040-\u309f"  # Hiragana
    "\u30a0-\u30ff"  # Katakana
    "\u2e80-\u2eff"  # CJK Radicals Supplement
    "\u31c0-\u31ef"  # CJK Strokes
    "\u3200-\u32ff"  # Enclosed CJK Letters and Months
    "\u3300-\u33ff"  # CJK Compatibility
    "\uac00-\ud7af"  # Hangul Syllables
    "\u1100-\u11ff"  # Hangul Jamo
    "\u3130-\u318f"  # Hangul Compatibility Jamo
    "\ua960-\ua97f"  # Hangul Jamo Extended-A
    "\ud7b0-\ud7ff"  # Hangul Jamo Extended-B
    "]"
)

# Digit runs, optionally grouped by "." or ","
NUMERIC_PATTERN = re.compile(r"[0-9]+(?:[.,][0-9]+)*")

# ASCII letters and digits plus Latin-1 letters, skipping the two math signs
ALPHANUMERIC_PATTERN = re.compile("[a-zA-Z0-9\u00c0-\u00d6\u00d8-\u00f6\u00f8-\u00ff]+")

# Whitespace runs and punctuation runs are captured so re.split keeps them
TOKEN_SPLIT_PATTERN = re.compile(f"(\\s+|[{PUNCTUATION_CHARS}]+)")

DEFAULT_CHARS_PER_TOKEN = 6
SHORT_TOKEN_THRESHOLD = 3

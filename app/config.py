"""
Configuration module for the sensitive-word filtering service.

Centralizes the mask token, symbol-classifier bounds, keyword source
location, upload limits and logging level.
"""

import os
from pathlib import Path

APP_DIR = Path(__file__).resolve().parent

# ---------------------------------------------------------------------------
# Mask substituted for every recognised keyword, regardless of its length
# ---------------------------------------------------------------------------
MASK_TOKEN: str = "***"

# ---------------------------------------------------------------------------
# CJK block treated as matchable content even when not a letter/number
# ---------------------------------------------------------------------------
CJK_RANGE_START: int = 0x2E80
CJK_RANGE_END: int = 0x9FFF

# ---------------------------------------------------------------------------
# Keyword source – one keyword per line (.txt) or first column (.csv)
# ---------------------------------------------------------------------------
KEYWORD_FILE: Path = Path(
    os.getenv("SENSITIVE_WORDS_FILE", str(APP_DIR / "data" / "sensitive-words.txt"))
)

KEYWORD_EXTENSIONS: set[str] = {".txt", ".csv"}

# ---------------------------------------------------------------------------
# Uploads
# ---------------------------------------------------------------------------
ALLOWED_EXTENSIONS: set[str] = {".txt", ".csv", ".pdf", ".docx", ".png", ".jpg", ".jpeg"}

MAX_TEXT_LENGTH: int = 100_000

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

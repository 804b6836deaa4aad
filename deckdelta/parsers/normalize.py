import re

WHITESPACE_RUN = re.compile(r"\s+")

# Curly quotes, backtick and prime all fold to a plain apostrophe
APOSTROPHE_VARIANTS = re.compile("['‘’`′]")


def normalize_name(name: str) -> str:
    """Collapse whitespace, fold apostrophe variants, and trim."""
    name = WHITESPACE_RUN.sub(" ", name)
    name = APOSTROPHE_VARIANTS.sub("'", name)
    return name.strip()

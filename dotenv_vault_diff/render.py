"""Comment body assembly. Pure: same fragments in, same bytes out."""
from __future__ import annotations

from typing import Iterable

DEFAULT_HEADER = "Dotenv-vault Diff"


def render_summary(fragments: Iterable[str], header: str = DEFAULT_HEADER) -> str:
    """Header line, blank line, then one fragment per line.

    The existing comment is found by its header prefix, so the header must stay
    the first line.
    """
    return f"{header}\n\n" + "\n".join(fragments)

"""
Inline style markup

Templates may decorate text with ``{style body}`` blocks, for example
``{gray [%date]}`` or ``{bold.red failed}``. Blocks nest, and ``\\{`` / ``\\}``
produce literal braces. Rendering turns blocks into ANSI escape sequences;
``strip_markup`` recovers the plain text from a rendered string.
"""

import re
from typing import List, Optional, Set

RESET = "\033[0m"

# SGR parameters, looked up case-insensitively
STYLE_CODES = {
    "bold": "1",
    "dim": "2",
    "italic": "3",
    "underline": "4",
    "inverse": "7",
    "hidden": "8",
    "strikethrough": "9",
    "black": "30",
    "red": "31",
    "green": "32",
    "yellow": "33",
    "blue": "34",
    "magenta": "35",
    "cyan": "36",
    "white": "37",
    "gray": "90",
    "grey": "90",
    "redbright": "91",
    "greenbright": "92",
    "yellowbright": "93",
    "bluebright": "94",
    "magentabright": "95",
    "cyanbright": "96",
    "whitebright": "97",
    "bgblack": "40",
    "bgred": "41",
    "bggreen": "42",
    "bgyellow": "43",
    "bgblue": "44",
    "bgmagenta": "45",
    "bgcyan": "46",
    "bgwhite": "47",
    "bggray": "100",
    "bggrey": "100",
}

_OPEN_RE = re.compile(r"\{([A-Za-z][A-Za-z0-9]*(?:\.[A-Za-z][A-Za-z0-9]*)*) ")
_ANSI_RE = re.compile(
    r"[\u001b\u009b][\[()#;?]*(?:[0-9]{1,4}(?:;[0-9]{0,4})*)?[0-9A-ORZcf-nqry=><]"
)


def _sgr(codes: List[str]) -> str:
    return "\033[" + ";".join(codes) + "m"


def _style_codes(spec: str) -> Optional[List[str]]:
    codes = []
    for name in spec.split("."):
        code = STYLE_CODES.get(name.lower())
        if code is None:
            return None
        codes.append(code)
    return codes


def _closed_braces(text: str) -> Set[int]:
    """Positions of unescaped ``{`` that have a matching ``}``."""
    closed: Set[int] = set()
    stack: List[int] = []
    i = 0
    length = len(text)
    while i < length:
        ch = text[i]
        if ch == "\\" and i + 1 < length and text[i + 1] in "{}":
            i += 2
            continue
        if ch == "{":
            stack.append(i)
        elif ch == "}" and stack:
            closed.add(stack.pop())
        i += 1
    return closed


class MarkupRenderer:
    """Expand style blocks into ANSI sequences."""

    def __init__(self, colored: bool = True):
        """
        Initialize markup renderer.

        Args:
            colored: Emit ANSI codes. When False the block syntax is
                     removed and only the text remains.
        """
        self.colored = colored

    def render(self, text: str) -> str:
        """
        Render markup in text.

        A ``{`` that does not open a block with known style names is kept
        verbatim together with its matching ``}``. A block that is never
        closed is kept verbatim as well.
        """
        closed = _closed_braces(text)
        out: List[str] = []
        # None marks a literal brace pair, a list marks an open style block
        stack: List[Optional[List[str]]] = []
        i = 0
        length = len(text)

        while i < length:
            ch = text[i]

            if ch == "\\" and i + 1 < length and text[i + 1] in "{}":
                out.append(text[i + 1])
                i += 2
                continue

            if ch == "{":
                if i not in closed:
                    out.append(ch)
                    i += 1
                    continue
                match = _OPEN_RE.match(text, i)
                codes = _style_codes(match.group(1)) if match else None
                if codes is not None:
                    stack.append(codes)
                    if self.colored:
                        out.append(_sgr(codes))
                    i = match.end()
                    continue
                stack.append(None)
                out.append(ch)
                i += 1
                continue

            if ch == "}" and stack:
                codes = stack.pop()
                if codes is None:
                    out.append(ch)
                elif self.colored:
                    out.append(RESET)
                    out.extend(_sgr(outer) for outer in stack if outer)
                i += 1
                continue

            out.append(ch)
            i += 1

        return "".join(out)

    def __repr__(self) -> str:
        """String representation."""
        return f"MarkupRenderer(colored={self.colored})"


def render(text: str, colored: bool = True) -> str:
    """Render markup with a one-off renderer."""
    return MarkupRenderer(colored).render(text)


def strip_markup(text: str) -> str:
    """Remove ANSI escape sequences."""
    return _ANSI_RE.sub("", text)

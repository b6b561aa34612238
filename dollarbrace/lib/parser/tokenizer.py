r"""
Tokenizer for ${...} placeholders.

Splits text into literal and placeholder tokens. Placeholders may nest
("${a_${b}}" is one placeholder whose body is "a_${b}"); the body is
returned unexpanded so that the resolver consuming it decides how and
whether to expand it.

Delimiter rules:
- "${" opens a placeholder and nests inside an open one
- a "{" not preceded by "$" is ordinary text, but must be closed by its own
  "}" before the placeholder can close
- an opener that is never closed is not a placeholder; it and everything
  after it is kept as literal text

Example:
    tokens_split("${abc} ${a")
    -> [Token("abc", True), Token(" ${a", False)]
"""

from typing import Optional
from dollarbrace.models.dataModel import Token, ScanResult

OPENER: str = "${"
CLOSER: str = "}"


def placeholder_end(text: str, start: int) -> Optional[int]:
    """Find the closing brace of the placeholder opened at `start`.

    Args:
        text: Text being tokenized
        start: Index of the "$" of an opener

    Returns:
        Index of the matching "}", or None if the opener is never closed
    """
    dollar_depth: int = 1
    brace_depth: int = 0
    last_dollar: bool = False

    for position in range(start + len(OPENER), len(text)):
        char: str = text[position]
        if char == "$":
            last_dollar = True
            continue
        if char == "{":
            if last_dollar:
                dollar_depth += 1
            else:
                brace_depth += 1
        elif char == CLOSER:
            if brace_depth > 0:
                brace_depth -= 1
            else:
                dollar_depth -= 1
                if dollar_depth == 0:
                    return position
        last_dollar = False

    return None


def tokens_split(text: str) -> list[Token]:
    """Split text into literal and placeholder tokens.

    Args:
        text: Raw text possibly containing ${...} placeholders

    Returns:
        Tokens in input order. Literal tokens are never empty; an empty
        input gives an empty list.
    """
    tokens: list[Token] = []
    index: int = 0

    while True:
        start: int = text.find(OPENER, index)
        if start == -1:
            break
        end: Optional[int] = placeholder_end(text, start)
        if end is None:
            break

        if start != index:
            tokens.append(Token(text[index:start]))
        tokens.append(Token(text[start + len(OPENER) : end], is_property=True))
        index = end + 1

    if index != len(text):
        tokens.append(Token(text[index:]))
    return tokens


def placeholders_scan(text: str) -> ScanResult:
    """Report the placeholders of `text` without resolving anything.

    Args:
        text: Text to scan

    Returns:
        ScanResult with the placeholder bodies and, if an opener was left
        unclosed, the literal text starting at it
    """
    tokens: list[Token] = tokens_split(text)
    result: ScanResult = ScanResult(
        placeholders=[token.value for token in tokens if token.is_property]
    )
    if tokens and not tokens[-1].is_property and OPENER in tokens[-1].value:
        tail: str = tokens[-1].value
        result.dangling = tail[tail.index(OPENER) :]
    return result

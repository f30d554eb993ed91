# File: src/gitkeep/services/patterns.py

import re
from typing import List, Optional, Tuple
from ..const import ESCAPABLE_CHARS
from ..domain import Rule

# (character, was_escaped)
Token = Tuple[str, bool]


class RegexPredicate:
    """Matches a root-relative posix path against a compiled regular expression."""

    def __init__(self, regex: str):
        self.regex = re.compile(regex)

    def matches(self, path: str) -> bool:
        return self.regex.search(path) is not None

    def __repr__(self) -> str:
        return f"RegexPredicate({self.regex.pattern!r})"


class LiteralPredicate:
    """
    Wildcard-free counterpart of RegexPredicate. Compares path components
    directly instead of going through the regex engine.
    """

    def __init__(self, literal: str, anchored_prefix: Optional[str] = None, dir_only: bool = False):
        self.literal = literal
        self.anchored_prefix = anchored_prefix
        self.dir_only = dir_only

    def matches(self, path: str) -> bool:
        if self.anchored_prefix is not None:
            target = self.anchored_prefix + self.literal
            if path == target:
                return True
            return self.dir_only and path.startswith(target + "/")

        if self.dir_only:
            return f"/{self.literal}/" in f"/{path}/"
        return path == self.literal or path.endswith("/" + self.literal)

    def __repr__(self) -> str:
        return f"LiteralPredicate({self.literal!r}, anchored_prefix={self.anchored_prefix!r}, dir_only={self.dir_only})"


def _tokenize(text: str) -> List[Token]:
    tokens = []
    i = 0
    while i < len(text):
        ch = text[i]
        if ch == "\\" and i + 1 < len(text) and text[i + 1] in ESCAPABLE_CHARS:
            tokens.append((text[i + 1], True))
            i += 2
            continue
        tokens.append((ch, False))
        i += 1
    return tokens


def _split_segments(tokens: List[Token]) -> List[List[Token]]:
    segments: List[List[Token]] = [[]]
    for token in tokens:
        if token == ("/", False):
            segments.append([])
        else:
            segments[-1].append(token)
    return segments


def _is_globstar(segment: List[Token]) -> bool:
    return segment == [("*", False), ("*", False)]


def _translate_segment(segment: List[Token]) -> str:
    out = []
    for ch, escaped in segment:
        if not escaped and ch == "*":
            out.append("[^/]*")
        elif not escaped and ch == "?":
            out.append("[^/]")
        else:
            out.append(re.escape(ch))
    return "".join(out)


def translate(tokens: List[Token]) -> str:
    """Translates the body of a pattern (no anchoring, no suffix) into a regex fragment."""
    segments = _split_segments(tokens)
    last = len(segments) - 1
    parts = []

    for i, segment in enumerate(segments):
        if _is_globstar(segment):
            # '**' owns its trailing separator so that '**/foo' also matches 'foo'
            parts.append(".*" if i == last else "(?:.*/)?")
            continue
        parts.append(_translate_segment(segment))
        if i != last:
            parts.append("/")

    return "".join(parts)


def build_predicate(tokens: List[Token], anchored: bool, base_dir: str, dir_only: bool):
    has_wildcard = any(not escaped and ch in "*?" for ch, escaped in tokens)
    prefix = "" if base_dir == "." else base_dir + "/"

    if not has_wildcard:
        literal = "".join(ch for ch, _ in tokens)
        return LiteralPredicate(literal, prefix if anchored else None, dir_only)

    body = translate(tokens)
    head = "^" + re.escape(prefix) if anchored else "(?:^|/)"
    tail = "(?:/.*)?$" if dir_only else "$"
    return RegexPredicate(head + body + tail)


def compile_rule(line: str, base_dir: str, original: Optional[str] = None) -> Optional[Rule]:
    """
    Compiles one trimmed ignore-file line into a Rule.

    Returns None when nothing is left once the negation prefix and the
    leading/trailing slashes are stripped.
    """
    raw = line
    negated = line.startswith("!")
    if negated:
        line = line[1:]

    tokens = _tokenize(line)

    dir_only = False
    if tokens and tokens[-1] == ("/", False):
        dir_only = True
        tokens.pop()

    anchored = False
    if tokens and tokens[0] == ("/", False):
        anchored = True
        tokens.pop(0)

    tokens = [("/", False) if token == ("\\", False) else token for token in tokens]

    if not tokens:
        return None

    return Rule(
        pattern="".join(ch for ch, _ in tokens),
        negated=negated,
        dir_only=dir_only,
        anchored=anchored,
        base_dir=base_dir,
        predicate=build_predicate(tokens, anchored, base_dir, dir_only),
        original=original if original is not None else raw,
    )

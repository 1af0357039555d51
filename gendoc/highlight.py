"""Rule-driven source code tokenizer used for syntax highlighting.

This is a best-effort classifier, not a lexer for any real language: each
rule set is a handful of regular expressions and word lists, tried in a
fixed priority order at every position.
"""

from __future__ import annotations

import re
import tomllib
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from importlib import resources
from pathlib import Path
from typing import Pattern

from .exceptions import RuleSetError
from .models import Token, TokenClass

PATTERN_FLAGS = re.IGNORECASE | re.MULTILINE | re.DOTALL

RULE_KEYS = ("comments", "pseudo", "operators", "numbers", "strings", "brackets", "types", "keywords")

# Always separators, whatever the rule set says.
SEPARATORS = frozenset(") \t\r\n")
MARKER_PATTERN = re.compile(r"</?h[lm]>", re.IGNORECASE)
SHEBANG = "#!"


@dataclass(frozen=True)
class RuleSet:
    """Per-language highlight rules.

    Attributes:
        comments: Patterns for comments, tried first.
        pseudo: Patterns for preprocessor or pseudo instructions.
        operators: Operator patterns.
        numbers: Numeric literal patterns.
        strings: String delimiters; the last character of each closes it.
        brackets: Single characters that separate tokens.
        types: Lowercase type-like keywords.
        keywords: Lowercase keywords.
    """

    comments: tuple[Pattern[str], ...] = ()
    pseudo: tuple[Pattern[str], ...] = ()
    operators: tuple[Pattern[str], ...] = ()
    numbers: tuple[Pattern[str], ...] = ()
    strings: tuple[str, ...] = ()
    brackets: frozenset[str] = frozenset()
    types: frozenset[str] = frozenset()
    keywords: frozenset[str] = frozenset()

    @classmethod
    def from_mapping(cls, data: Mapping[str, object], source: str = "<rules>") -> RuleSet:
        """Build a rule set from a decoded rule file.

        Raises:
            RuleSetError: On unknown keys, non-list values, empty entries,
                multi-character brackets or invalid regular expressions.
        """
        unknown = sorted(set(data) - set(RULE_KEYS))
        if unknown:
            raise RuleSetError(source, f"unknown keys: {', '.join(unknown)}")

        lists = {key: _string_list(data.get(key, []), key, source) for key in RULE_KEYS}
        for bracket in lists["brackets"]:
            if len(bracket) != 1:
                raise RuleSetError(source, f"bracket {bracket!r} must be a single character")

        return cls(
            comments=_compile_all(lists["comments"], source),
            pseudo=_compile_all(lists["pseudo"], source),
            operators=_compile_all(lists["operators"], source),
            numbers=_compile_all(lists["numbers"], source),
            strings=tuple(lists["strings"]),
            brackets=frozenset(lists["brackets"]),
            types=frozenset(word.lower() for word in lists["types"]),
            keywords=frozenset(word.lower() for word in lists["keywords"]),
        )


def _string_list(value: object, key: str, source: str) -> list[str]:
    if not isinstance(value, list) or not all(isinstance(item, str) and item for item in value):
        raise RuleSetError(source, f"`{key}` must be a list of non-empty strings")
    return value


def _compile_all(patterns: Iterable[str], source: str) -> tuple[Pattern[str], ...]:
    compiled = []
    for pattern in patterns:
        try:
            compiled.append(re.compile(pattern, PATTERN_FLAGS))
        except re.error as error:
            raise RuleSetError(source, f"invalid pattern {pattern!r}: {error}") from error
    return tuple(compiled)


GENERIC_RULES = RuleSet.from_mapping(
    {
        "comments": [r"//.*?$", r"/\*.*?\*/", r"#.*?$"],
        "operators": [r"[:=<>+\-*/%&^|!][:=]?"],
        "numbers": [r"[0-9][0-9bx]?[0-9.a-f+\-]*?"],
        "strings": ['"', "'", "`"],
        "brackets": ["[", "]", "{", "}", ")", ",", ";"],
        "types": [
            "char", "int", "float", "true", "false", "nil", "null", "nullptr", "none",
            "public", "static", "struct", "from", "with", "new", "delete",
        ],
        "keywords": [
            "import", "def", "if", "then", "else", "endif", "elif", "switch", "case", "loop",
            "until", "for", "foreach", "as", "is", "in", "or", "and", "while", "do", "break",
            "continue", "function", "return", "enum", "try", "catch", "volatile", "class",
            "typedef",
        ],
    },
    source="generic",
)


class RuleRegistry:
    """Highlight rule sets keyed by language tag."""

    def __init__(self):
        self._rules: dict[str, RuleSet] = {}

    @classmethod
    def with_bundled(cls) -> RuleRegistry:
        registry = cls()
        registry.load_bundled()
        return registry

    def __contains__(self, language: str) -> bool:
        return language in self._rules

    def languages(self) -> list[str]:
        return sorted(self._rules)

    def get(self, language: str) -> RuleSet | None:
        return self._rules.get(language)

    def register(self, language: str, rules: RuleSet) -> None:
        self._rules[language] = rules

    def load_bundled(self) -> None:
        for entry in sorted(resources.files("gendoc").joinpath("rules").iterdir(), key=lambda e: e.name):
            if entry.name.endswith(".toml"):
                self._load(entry.name[: -len(".toml")], entry.read_bytes(), f"gendoc/rules/{entry.name}")

    def load_directory(self, directory: Path) -> None:
        """Load every ``*.toml`` rule file in `directory`, replacing same-named sets."""
        for path in sorted(Path(directory).glob("*.toml")):
            self.load_file(path)

    def load_file(self, path: Path) -> None:
        try:
            raw = path.read_bytes()
        except OSError as error:
            raise RuleSetError(str(path), str(error)) from error
        self._load(path.stem, raw, str(path))

    def _load(self, language: str, raw: bytes, source: str) -> None:
        try:
            data = tomllib.loads(raw.decode("utf-8"))
        except (UnicodeDecodeError, tomllib.TOMLDecodeError) as error:
            raise RuleSetError(source, str(error)) from error
        self.register(language, RuleSet.from_mapping(data, source))


def _append(tokens: list[Token], kind: TokenClass, text: str) -> None:
    """Extend the last token when it has the same class, else start a new one."""
    if tokens and tokens[-1].kind is kind:
        tokens[-1].text += text
    else:
        tokens.append(Token(kind, text))


def _match_rules(rules: RuleSet, tokens: list[Token], text: str, pos: int) -> int:
    families = (
        (TokenClass.COMMENT, rules.comments),
        (TokenClass.PSEUDO, rules.pseudo),
        (TokenClass.OPERATOR, rules.operators),
        (TokenClass.NUMBER, rules.numbers),
    )
    for kind, patterns in families:
        # Digits inside an identifier belong to the identifier.
        if kind is TokenClass.NUMBER and tokens and tokens[-1].kind is TokenClass.VALUE:
            continue
        for pattern in patterns:
            match = pattern.match(text, pos)
            if match and match.end() > pos:
                _append(tokens, kind, match.group())
                return match.end()
    return pos


def _string_end(text: str, pos: int, delimiter: str) -> int:
    """Return the index just past the string literal opened at `pos`."""
    closing = delimiter[-1]
    index = pos + len(delimiter)
    while index < len(text):
        char = text[index]
        if char == "\\":
            index += 1
        elif char == closing:
            if index + 1 < len(text) and text[index + 1] == closing:
                index += 1
            else:
                break
        index += 1
    return min(index + 1, len(text))


def _split(text: str, rules: RuleSet) -> list[Token]:
    tokens: list[Token] = []
    pos = 0
    if text.startswith(SHEBANG):
        end = len(text)
        for newline in "\r\n":
            found = text.find(newline)
            if found != -1:
                end = min(end, found)
        tokens.append(Token(TokenClass.COMMENT, text[:end]))
        pos = end

    while pos < len(text):
        marker = MARKER_PATTERN.match(text, pos)
        if marker:
            tokens.append(Token(TokenClass.NONE, marker.group()))
            pos = marker.end()
            continue

        char = text[pos]
        if char == "(" or char in SEPARATORS or char in rules.brackets:
            tokens.append(Token(TokenClass.NONE, char))
            pos += 1
            continue

        matched = _match_rules(rules, tokens, text, pos)
        if matched != pos:
            pos = matched
            continue

        for delimiter in rules.strings:
            if text.startswith(delimiter, pos):
                end = _string_end(text, pos, delimiter)
                tokens.append(Token(TokenClass.STRING, text[pos:end]))
                pos = end
                break
        else:
            _append(tokens, TokenClass.VALUE, char)
            pos += 1

    return tokens


def _is_call(tokens: list[Token], index: int) -> bool:
    following = tokens[index + 1 : index + 3]
    if following and following[0].text.startswith("("):
        return True
    return (
        len(following) == 2
        and following[0].kind is TokenClass.NONE
        and not MARKER_PATTERN.match(following[0].text)
        and following[1].text.startswith("(")
    )


def _reclassify(tokens: list[Token], rules: RuleSet) -> list[Token]:
    result: list[Token] = []
    for index, token in enumerate(tokens):
        if token.kind is TokenClass.VALUE:
            word = token.text.lower()
            if word in rules.types:
                token.kind = TokenClass.TYPE
            elif word in rules.keywords:
                token.kind = TokenClass.KEYWORD
            elif _is_call(tokens, index):
                token.kind = TokenClass.FUNCTION
        if (
            token.kind is TokenClass.NUMBER
            and result
            and result[-1].kind is TokenClass.OPERATOR
            and result[-1].text in ("-", ".")
        ):
            token.text = result.pop().text + token.text
        result.append(token)
    return result


def tokenize(text: str, rules: RuleSet | None = None) -> list[Token]:
    """Split source code into classified tokens.

    Concatenating the text of the returned tokens always reproduces `text`.

    Args:
        text: Source code of one code block.
        rules: Rule set of the block's language; the generic rules when None.

    Returns:
        list[Token]: Tokens in source order.

    Examples:
        [t.kind for t in tokenize("x = -1")]
        # [VALUE, NONE, OPERATOR, NONE, NUMBER]
    """
    rules = rules or GENERIC_RULES
    return _reclassify(_split(text, rules), rules)

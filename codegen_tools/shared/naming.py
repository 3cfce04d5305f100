"""Naming utilities for code generation.

Case conversion, English singular/plural inflection and the composite
identifiers used by the model generator. Every function here is pure and
total: ``None`` and empty input are treated as the empty string.
"""

from __future__ import annotations

import re
from enum import Enum
from functools import lru_cache
from typing import Callable


class CaseStyle(str, Enum):
    """Identifier rendering styles. ``None`` means "leave unchanged"."""

    CAMEL = "camel"
    PASCAL = "pascal"
    LOWER_SNAKE = "lower_snake"
    UPPER_SNAKE = "upper_snake"
    KEBAB = "kebab"


class SingularizationMode(str, Enum):
    """Number forced onto a resolved name. ``None`` means "leave unchanged"."""

    SINGULAR = "singular"
    PLURAL = "plural"


# Word boundaries: lower (plus trailing digits) -> upper, and the last
# capital of an acronym run followed by a lowercase letter.
_SPLIT_LOWER_UPPER = re.compile(r"([a-z]\d*)([A-Z])")
_SPLIT_UPPER_UPPER = re.compile(r"([A-Z])([A-Z][a-z])")
_SEPARATORS = re.compile(r"[\W_]+")

_LAST_WORD = re.compile(r"([A-Z]?[a-z]+|[A-Z]+)$")
_ID_PATTERN = re.compile(r"_id|Id")

_UNCOUNTABLE: frozenset[str] = frozenset({
    "equipment",
    "information",
    "metadata",
    "money",
    "news",
    "rice",
    "series",
    "sheep",
    "species",
})

# Common irregular plurals
_IRREGULAR_PLURALS: dict[str, str] = {
    "children": "child",
    "people": "person",
    "men": "man",
    "women": "woman",
    "mice": "mouse",
    "geese": "goose",
    "teeth": "tooth",
    "feet": "foot",
    "data": "datum",
    "criteria": "criterion",
    "analyses": "analysis",
    "indices": "index",
    "appendices": "appendix",
    "matrices": "matrix",
    "vertices": "vertex",
    "movies": "movie",
    "knives": "knife",
    "wives": "wife",
    "halves": "half",
    "shelves": "shelf",
    "wolves": "wolf",
    "thieves": "thief",
    "leaves": "leaf",
}
_IRREGULAR_SINGULARS: dict[str, str] = {
    singular: plural for plural, singular in _IRREGULAR_PLURALS.items()
}

# First matching rule wins.
_SINGULAR_RULES: tuple[tuple[re.Pattern[str], str], ...] = tuple(
    (re.compile(pattern), replacement)
    for pattern, replacement in (
        (r"^(alias|atlas|bias|canvas|gas|lens)$", r"\1"),
        (r"^(cache|niche|headache|avalanche|moustache|mustache|cliche)s$", r"\1"),
        (r"^(cookie|rookie|zombie|brownie|calorie|selfie|smoothie|pie|tie|lie)s$", r"\1"),
        (r"(quiz)zes$", r"\1"),
        (r"(alias|status|campus|virus|census|bonus)es$", r"\1"),
        (r"^(bus|gas|bias|atlas|canvas|lens)es$", r"\1"),
        (r"(analy|cri|diagno|empha|hypothe|parenthe|progno|synop|the)(sis|ses)$", r"\1sis"),
        (r"(x|ch|sh|ss|zz)es$", r"\1"),
        (r"([^aeiouy]|qu)ies$", r"\1y"),
        (r"(ss|us|is)$", r"\1"),
        (r"s$", ""),
    )
)
_PLURAL_RULES: tuple[tuple[re.Pattern[str], str], ...] = tuple(
    (re.compile(pattern), replacement)
    for pattern, replacement in (
        (r"(quiz)$", r"\1zes"),
        (r"sis$", "ses"),
        (r"(x|ch|sh|ss|zz|us|s)$", r"\1es"),
        (r"([^aeiouy]|qu)y$", r"\1ies"),
        (r"$", "s"),
    )
)


def _text(value: str | None) -> str:
    return "" if value is None else str(value)


def _match_case(source: str, result: str) -> str:
    """Give ``result`` the case pattern of ``source``."""
    if source.isupper() and len(source) > 1:
        return result.upper()
    if source[:1].isupper():
        return result[:1].upper() + result[1:]
    return result


def _apply_rules(word: str, rules: tuple[tuple[re.Pattern[str], str], ...]) -> str:
    for pattern, replacement in rules:
        if pattern.search(word):
            return pattern.sub(replacement, word, count=1)
    return word


def _singular_word(word: str) -> str:
    if word in _UNCOUNTABLE or word in _IRREGULAR_SINGULARS:
        return word
    if word in _IRREGULAR_PLURALS:
        return _IRREGULAR_PLURALS[word]
    return _apply_rules(word, _SINGULAR_RULES) or word


def _plural_word(word: str) -> str:
    if word in _UNCOUNTABLE or word in _IRREGULAR_PLURALS:
        return word
    if word in _IRREGULAR_SINGULARS:
        return _IRREGULAR_SINGULARS[word]
    if _singular_word(word) != word:
        # already plural
        return word
    return _apply_rules(word, _PLURAL_RULES)


def _inflect_last_word(value: str, inflect: Callable[[str], str]) -> str:
    match = _LAST_WORD.search(value)
    if match is None:
        return value
    word = match.group(1)
    return value[: match.start(1)] + _match_case(word, inflect(word.lower()))


@lru_cache(maxsize=1024)
def singularize(name: str) -> str:
    """Convert the last word of an identifier to its singular form.

    Uses caching for repeated calls with the same input.

    Examples:
        >>> singularize("blog_posts")
        'blog_post'
        >>> singularize("Children")
        'Child'
    """
    return _inflect_last_word(_text(name), _singular_word)


@lru_cache(maxsize=1024)
def pluralize(name: str) -> str:
    """Convert the last word of an identifier to its plural form.

    Words that are already plural are returned unchanged.

    Examples:
        >>> pluralize("category")
        'categories'
        >>> pluralize("users")
        'users'
    """
    return _inflect_last_word(_text(name), _plural_word)


@lru_cache(maxsize=1024)
def split_words(value: str) -> tuple[str, ...]:
    """Split an identifier into its words, keeping their original case."""
    value = _SPLIT_LOWER_UPPER.sub(r"\1 \2", _text(value))
    value = _SPLIT_UPPER_UPPER.sub(r"\1 \2", value)
    return tuple(word for word in _SEPARATORS.split(value) if word)


def _capitalize_words(words: tuple[str, ...], *, lower_first: bool) -> str:
    parts: list[str] = []
    for index, word in enumerate(words):
        if index == 0 and lower_first:
            parts.append(word.lower())
        elif index > 0 and word[0].isdigit():
            # keep the boundary visible so the name splits the same way again
            parts.append("_" + word.lower())
        else:
            parts.append(word[0].upper() + word[1:].lower())
    return "".join(parts)


@lru_cache(maxsize=1024)
def to_pascal_case(value: str) -> str:
    """Convert a string to PascalCase.

    Examples:
        >>> to_pascal_case("hello_world")
        'HelloWorld'
        >>> to_pascal_case("helloWorld")
        'HelloWorld'
    """
    return _capitalize_words(split_words(value), lower_first=False)


@lru_cache(maxsize=1024)
def to_camel_case(value: str) -> str:
    """Convert a string to camelCase.

    Examples:
        >>> to_camel_case("created_at")
        'createdAt'
    """
    return _capitalize_words(split_words(value), lower_first=True)


@lru_cache(maxsize=1024)
def to_snake_case(value: str) -> str:
    """Convert a string to snake_case.

    Examples:
        >>> to_snake_case("HelloWorld")
        'hello_world'
        >>> to_snake_case("hello-world")
        'hello_world'
    """
    return "_".join(word.lower() for word in split_words(value))


def to_constant_case(value: str) -> str:
    """Convert a string to UPPER_SNAKE_CASE (snake case, then uppercased)."""
    return to_snake_case(value).upper()


@lru_cache(maxsize=1024)
def to_kebab_case(value: str) -> str:
    """Convert a string to kebab-case."""
    return "-".join(word.lower() for word in split_words(value))


def normalize(name: str) -> str:
    """Lowercase words separated by single spaces.

    Examples:
        >>> normalize("UserName")
        'user name'
        >>> normalize("table_name")
        'table name'
    """
    return " ".join(word.lower() for word in split_words(name))


def normalize_singular(name: str) -> str:
    """Normalize a name and singularize its last word."""
    return singularize(normalize(name))


def table_to_model(table: str) -> str:
    """Convert a table name to a singular PascalCase model name.

    Examples:
        >>> table_to_model("blog_posts")
        'BlogPost'
    """
    return to_pascal_case(singularize(table))


def to_property_name(column: str) -> str:
    """Convert a column name to a camelCase property name."""
    return to_camel_case(column)


def omit_id(column_name: str | None, pascalize: bool = False) -> str:
    """Remove every ``_id`` and ``Id`` occurrence from a column name.

    The match is case-sensitive and not anchored: ``"IdentityCard"`` loses
    its leading ``Id`` as well.

    Examples:
        >>> omit_id("user_id")
        'user'
        >>> omit_id("postId", pascalize=True)
        'Post'
    """
    column = _ID_PATTERN.sub("", _text(column_name))
    return to_pascal_case(column) if pascalize else column


def to_configurable_enum_name(table_name: str, column_name: str) -> str:
    """Build the enum type name for an enum-like column.

    Examples:
        >>> to_configurable_enum_name("users", "roles")
        'UserRole'
    """
    return to_pascal_case(f"{singularize(table_name)}_{singularize(column_name)}")


def _coerce(enum_type, value):
    if value is None or isinstance(value, enum_type):
        return value
    try:
        return enum_type(value)
    except ValueError:
        return None


def get_mode_singularize(
    name: str,
    mode: SingularizationMode | str | None,
) -> str:
    """Force a name singular or plural; an unset mode returns it unchanged."""
    mode = _coerce(SingularizationMode, mode)
    if mode is SingularizationMode.SINGULAR:
        return singularize(name)
    if mode is SingularizationMode.PLURAL:
        return pluralize(name)
    return _text(name)


_FORMATTERS: dict[CaseStyle, Callable[[str], str]] = {
    CaseStyle.CAMEL: to_camel_case,
    CaseStyle.PASCAL: to_pascal_case,
    CaseStyle.LOWER_SNAKE: to_snake_case,
    CaseStyle.UPPER_SNAKE: to_constant_case,
    CaseStyle.KEBAB: to_kebab_case,
}


def format_name(name: str, case_style: CaseStyle | str | None) -> str:
    """Render a name in the given case style; an unset style returns it unchanged."""
    formatter = _FORMATTERS.get(_coerce(CaseStyle, case_style))
    if formatter is None:
        return _text(name)
    return formatter(_text(name))

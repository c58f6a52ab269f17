"""Vocabulary tables for garment tag extraction and validation.

Every word list the pipeline consults lives here as a named, ordered table.
Order matters: ``CLOTHING_CATEGORIES`` is scanned top to bottom when a noun
is categorized, and ``DESCRIPTOR_SLOTS`` fixes the Color, Material, Pattern
precedence used by the formatter.
"""

from __future__ import annotations

import re

# category -> nouns, scanned in this order
CLOTHING_CATEGORIES: dict[str, tuple[str, ...]] = {
    "tops": (
        "shirt", "blouse", "top", "sweater", "hoodie", "t-shirt", "tee",
        "polo", "turtleneck", "tank", "camisole",
    ),
    "bottoms": (
        "pants", "jeans", "trousers", "shorts", "skirt", "leggings",
        "chinos", "slacks",
    ),
    "dresses": ("dress", "gown", "sundress", "maxi", "midi"),
    "outerwear": (
        "jacket", "blazer", "coat", "cardigan", "vest", "parka", "trench",
    ),
    "footwear": (
        "shoes", "sneakers", "heels", "boots", "sandals", "flats",
        "loafers", "oxfords", "pumps",
    ),
    "accessories": (
        "belt", "bag", "handbag", "purse", "backpack", "hat", "cap",
        "scarf", "gloves", "socks", "jewelry", "necklace", "bracelet",
        "earrings", "watch", "sunglasses",
    ),
}

CATEGORIES: tuple[str, ...] = (*CLOTHING_CATEGORIES, "other")

CLOTHING_NOUNS: tuple[str, ...] = tuple(
    noun for nouns in CLOTHING_CATEGORIES.values() for noun in nouns
)

COLOR_WORDS: tuple[str, ...] = (
    "red", "blue", "green", "yellow", "orange", "purple", "pink", "black",
    "white", "gray", "grey", "brown", "navy", "beige", "cream", "tan",
    "olive", "maroon", "teal", "coral", "burgundy", "khaki", "mint",
    "lavender", "gold", "silver", "crimson", "scarlet", "azure",
    "turquoise", "emerald", "lime", "amber", "ivory", "charcoal", "slate",
    "plum", "magenta", "cyan", "indigo", "violet", "rose", "peach",
    "mustard", "rust", "sage",
)

MATERIAL_WORDS: tuple[str, ...] = (
    "cotton", "denim", "leather", "silk", "wool", "linen", "cashmere",
    "velvet", "satin", "chiffon", "suede", "mesh", "lace", "polyester",
    "nylon", "spandex", "jersey", "fleece", "canvas", "knit", "tweed",
    "corduroy",
)

PATTERN_WORDS: tuple[str, ...] = (
    "striped", "plaid", "checkered", "polka", "floral", "geometric",
    "abstract", "solid", "paisley", "leopard", "zebra", "camouflage",
    "tie-dye", "ombre", "houndstooth", "tartan", "gingham",
)

# Fit and cut words qualify an item but are not descriptors.
FIT_WORDS: tuple[str, ...] = (
    "oversized", "fitted", "loose", "tight", "slim", "cropped",
    "high-waisted", "low-rise", "wide-leg", "skinny", "straight",
    "bootcut", "relaxed", "tailored", "structured", "flowy", "wrap",
    "off-shoulder", "strapless", "sleeveless", "long-sleeve",
    "short-sleeve", "v-neck", "crew", "button-down", "zip-up", "ripped",
    "distressed",
)

# slot name -> vocabulary, in canonical name order
DESCRIPTOR_SLOTS: dict[str, tuple[str, ...]] = {
    "color": COLOR_WORDS,
    "material": MATERIAL_WORDS,
    "pattern": PATTERN_WORDS,
}

FORBIDDEN_WORDS: frozenset[str] = frozenset({
    "of", "with", "and", "the", "a", "an", "in", "on", "at", "to", "for",
    "from", "by", "against", "choice", "pairing", "providing", "contrast",
    "complements", "tones", "featuring", "worn", "outfit",
})

# Person/role nouns, pose verbs and meta-style nouns.
NON_WEARABLE_WORDS: frozenset[str] = frozenset({
    "woman", "man", "person", "people", "girl", "boy", "lady", "gentleman",
    "posing", "walking", "standing", "sitting", "wearing", "styled",
    "look", "style", "outfit", "ensemble", "appearance", "vibe",
    "aesthetic", "recommendation", "suggestion", "advice", "tip", "idea",
    "option",
})

STYLING_TERMS: frozenset[str] = frozenset({
    "layering", "ensemble", "coordination", "styling", "outfit", "look",
    "combination", "pairing", "silhouette", "palette", "aesthetic", "vibe",
    "proportions", "balance",
})

LEADING_ARTICLES: tuple[str, ...] = (
    "the", "a", "an", "this", "that", "these", "those", "your", "my",
    "her", "his", "their",
)

STYLING_VERBS: tuple[str, ...] = (
    "wearing", "wear", "paired", "pairing", "styled", "add", "adding",
    "try", "consider", "opt", "swap", "choose", "layer", "layered",
    "rock", "sporting",
)

COMBINATION_SEPARATORS: tuple[str, ...] = (" and ", " with ", " & ")

# Singular spellings of plural-only nouns. Words with a common non-garment
# sense (short, flat, slack, pump, heel, jean, oxford) are left out.
SINGULAR_FORMS: dict[str, str] = {
    "shoe": "shoes",
    "sneaker": "sneakers",
    "boot": "boots",
    "sandal": "sandals",
    "loafer": "loafers",
    "legging": "leggings",
    "trouser": "trousers",
    "pant": "pants",
    "chino": "chinos",
    "earring": "earrings",
    "glove": "gloves",
    "sock": "socks",
    "sunglass": "sunglasses",
}

_CLOTHING_NOUN_SET = frozenset(CLOTHING_NOUNS)
_COLOR_SET = frozenset(COLOR_WORDS)
_MATERIAL_SET = frozenset(MATERIAL_WORDS)
_PATTERN_SET = frozenset(PATTERN_WORDS)
_DESCRIPTOR_SET = _COLOR_SET | _MATERIAL_SET | _PATTERN_SET

_TOKEN_RE = re.compile(r"[a-z0-9]+(?:[-'][a-z0-9]+)*")
_WHITESPACE_RE = re.compile(r"\s+")


def tokenize(text: str) -> list[str]:
    """Lowercase word tokens; hyphenated words stay whole."""
    return _TOKEN_RE.findall(text.lower())


def normalize_name(name: str) -> str:
    """Merge key for names: lowercase with collapsed whitespace."""
    return _WHITESPACE_RE.sub(" ", name.strip().lower())


def match_clothing_noun(token: str) -> str | None:
    """Return the canonical clothing noun for *token*, tolerating plurals."""
    token = token.lower()
    if token in _CLOTHING_NOUN_SET:
        return token
    if token.endswith("es") and token[:-2] in _CLOTHING_NOUN_SET:
        return token[:-2]
    if token.endswith("s") and token[:-1] in _CLOTHING_NOUN_SET:
        return token[:-1]
    return SINGULAR_FORMS.get(token)


def find_clothing_noun(tokens: list[str]) -> str | None:
    """Return the head clothing noun of a phrase (the last one found)."""
    for token in reversed(tokens):
        noun = match_clothing_noun(token)
        if noun:
            return noun
    return None


def has_clothing_noun(text: str) -> bool:
    return find_clothing_noun(tokenize(text)) is not None


def descriptor_slot(token: str) -> str | None:
    """Return ``color``, ``material`` or ``pattern`` for a descriptor word."""
    token = token.lower()
    if token in _COLOR_SET:
        return "color"
    if token in _MATERIAL_SET:
        return "material"
    if token in _PATTERN_SET:
        return "pattern"
    return None


def is_descriptor(token: str) -> bool:
    return token.lower() in _DESCRIPTOR_SET


def is_forbidden(token: str) -> bool:
    return token.lower() in FORBIDDEN_WORDS


def categorize(name: str) -> str:
    """Category of the head clothing noun in *name*, or ``other``."""
    noun = find_clothing_noun(tokenize(name))
    if noun is None:
        return "other"
    for category, nouns in CLOTHING_CATEGORIES.items():
        if noun in nouns:
            return category
    return "other"


_FILLER_WORDS = frozenset(LEADING_ARTICLES) | frozenset(STYLING_VERBS)


def strip_leading_fillers(words: list[str]) -> list[str]:
    """Drop leading articles and styling verbs ("wearing a", "try the")."""
    start = 0
    while start < len(words) and words[start].lower() in _FILLER_WORDS:
        start += 1
    return words[start:]

"""Prompt templates for LLM phrase extraction."""

from .vocabulary import CLOTHING_CATEGORIES, COLOR_WORDS, MATERIAL_WORDS, PATTERN_WORDS

MAX_AI_ITEMS = 6

PHRASE_EXTRACTION_PROMPT = """\
You are a fashion expert extracting clothing items from an outfit description.
Use ONLY items from the vocabulary below.

CLOTHING ITEMS (by category):
{item_vocabulary}

DESCRIPTORS:
- Colors: {colors}
- Materials: {materials}
- Patterns: {patterns}

STRICT RULES - FOLLOW EXACTLY:
1. Extract clothing items ACTUALLY mentioned in the text
2. Format MUST be "[Descriptor] [Item]" or just "[Item]" (MAX 2 WORDS)
3. NO prepositions or articles (of, with, and, the, a, an, in, on, at, to, for, from, by, against)
4. Return at most {max_items} items
5. NO combinations or styling phrases

CORRECT: "Black Jacket", "Denim Jeans", "White Shirt", "Jacket"
INCORRECT: "Black leather jacket" (3 words), "Pairing of jeans" (preposition), \
"Shirt and pants" (combination)

TEXT TO ANALYZE:
\"\"\"{text}\"\"\"

Return ONLY a JSON array of phrases, e.g. ["Black Jacket", "White Sneakers"]\
"""


def build_phrase_prompt(text: str, max_items: int = MAX_AI_ITEMS) -> str:
    item_vocabulary = "\n".join(
        f"- {category}: {', '.join(nouns)}" for category, nouns in CLOTHING_CATEGORIES.items()
    )
    return PHRASE_EXTRACTION_PROMPT.format(
        item_vocabulary=item_vocabulary,
        colors=", ".join(COLOR_WORDS),
        materials=", ".join(MATERIAL_WORDS),
        patterns=", ".join(PATTERN_WORDS),
        max_items=max_items,
        text=text,
    )

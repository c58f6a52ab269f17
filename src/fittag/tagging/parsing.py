"""LLM response parsing utilities."""

import json
import re


def _parse_phrases_json(response: str) -> list[str]:
    """Parse LLM response that returns [...] or {"items": [...]} format."""
    response = response.strip()

    # Strip ```json fences
    response = re.sub(r"^```(?:json)?\s*|\s*```$", "", response)

    # Try bare [...]
    arr_match = re.search(r"\[.*\]", response, re.DOTALL)
    if arr_match:
        try:
            phrases = json.loads(arr_match.group())
            if isinstance(phrases, list):
                return [p.strip() for p in phrases if isinstance(p, str) and p.strip()]
        except json.JSONDecodeError:
            pass

    # Try {"items": [...]}
    obj_match = re.search(r"\{.*\}", response, re.DOTALL)
    if obj_match:
        try:
            parsed = json.loads(obj_match.group())
            if isinstance(parsed, dict) and isinstance(parsed.get("items"), list):
                return [p.strip() for p in parsed["items"] if isinstance(p, str) and p.strip()]
        except json.JSONDecodeError:
            pass

    # Fallback: line-by-line
    phrases: list[str] = []
    for line in response.splitlines():
        line = line.strip().strip("-*•").strip().strip('"').strip("'").strip(",").strip()
        if line and len(line) >= 2 and not line.startswith("{") and not line.startswith("["):
            phrases.append(line)
    return phrases

"""Tier configuration and presets for the tagging pipeline."""

from dataclasses import dataclass


@dataclass
class TierConfig:
    name: str = "basic"

    max_items: int = 3
    # Source floor: discounted candidates below this never reach the merge.
    min_confidence: float = 0.5

    use_ai_extraction: bool = False
    use_dataset_matchers: bool = False
    validate: bool = False

    pattern_confidence: float = 0.7
    pattern_discount: float = 1.0
    # Positional: first dataset matcher gets 0.95, second 0.85.
    dataset_discounts: tuple[float, ...] = (0.95, 0.85)
    ai_discount: float = 0.9
    # Medium tier trusts the AI extractor as-is.
    medium_ai_discount: float = 1.0

    max_workers: int = 4
    extraction_method: str = "regex-with-style-validation"

    @property
    def max_dataset_matchers(self) -> int:
        return len(self.dataset_discounts)


TIER_PRESETS: dict[str, TierConfig] = {
    "basic": TierConfig(name="basic"),

    "medium": TierConfig(
        name="medium",
        max_items=5,
        min_confidence=0.7,
        use_ai_extraction=True,
        validate=True,
        extraction_method="ai-with-style-validation",
    ),

    "advanced": TierConfig(
        name="advanced",
        max_items=8,
        min_confidence=0.6,
        use_ai_extraction=True,
        use_dataset_matchers=True,
        validate=True,
        extraction_method="enhanced-multi-dataset-with-strict-validation",
    ),
}


def get_tier_config(name: str) -> TierConfig:
    if name not in TIER_PRESETS:
        available = ", ".join(sorted(TIER_PRESETS))
        raise ValueError(f"Unknown tier '{name}'. Available: {available}")
    return TIER_PRESETS[name]

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from fittag.shared.logger import PipelineLogger, set_logger
from fittag.tagging.config import TIER_PRESETS
from fittag.tagging.pipeline import run_tagging
from fittag.tagging.types import TaggingResult


def _serialize_result(result: TaggingResult) -> dict:
    return {
        "tier": result.tier,
        "extraction_method": result.extraction_method,
        "tags": [tag.to_dict() for tag in result.tags],
        "item_count": result.item_count,
        "average_confidence": result.average_confidence,
        "candidate_count": result.candidate_count,
        "rejected": result.rejected,
        "failed_sources": result.failed_sources,
        "processing_time": result.processing_time,
    }


def _read_feedback(args: argparse.Namespace) -> str | None:
    if args.feedback is not None:
        return args.feedback
    if str(args.input) == "-":
        return sys.stdin.read()
    if not args.input.is_file():
        return None
    return args.input.read_text(encoding="utf-8")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Extract validated garment tags from outfit critique text.",
    )
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--feedback", type=str, help="Critique text")
    source.add_argument("--input", type=Path, help="File with critique text ('-' for stdin)")
    parser.add_argument("--suggestion", action="append", default=[],
                        help="Improvement suggestion (repeatable)")
    parser.add_argument("--tier", choices=sorted(TIER_PRESETS), default="advanced")
    parser.add_argument("--max-items", type=int, default=None)
    parser.add_argument("--llm", action="store_true",
                        help="Use the LLM phrase extractor (needs ANTHROPIC_API_KEY)")
    parser.add_argument("--json", action="store_true", help="Print the result as JSON")
    parser.add_argument("--item-id", type=str, default=None,
                        help="Opaque id forwarded to the AI extractor")
    parser.add_argument("--log-file", type=Path, default=None,
                        help="INFO+ log file (readable summary)")
    parser.add_argument("--trace-file", type=Path, default=None,
                        help="TRACE+ log file (full detail, every line)")

    args = parser.parse_args(argv)

    feedback = _read_feedback(args)
    if feedback is None:
        print(f"Error: Input file does not exist: {args.input}", file=sys.stderr)
        return 1

    log = PipelineLogger(
        log_file=args.log_file,
        trace_file=args.trace_file,
        console=not args.json,
        min_level="INFO",
    )
    set_logger(log)
    log.install_stdlib_bridge(root_logger="fittag", level=10)

    ai_extractor = None
    if args.llm:
        from fittag.tagging.llm_extractor import LLMPhraseExtractor
        ai_extractor = LLMPhraseExtractor()

    log.section("FitTag Extraction")
    log.info(f"Tier:        {args.tier}")
    log.info(f"Suggestions: {len(args.suggestion)}")
    log.info(f"AI extractor: {'llm' if ai_extractor else 'none'}")

    with log.timer("tagging"):
        result = run_tagging(
            feedback,
            args.suggestion,
            tier=args.tier,
            max_items=args.max_items,
            ai_extractor=ai_extractor,
            item_id=args.item_id,
        )

    log.metric("candidates", result.candidate_count)
    log.metric("tags", result.item_count)
    log.metric("avg_confidence", result.average_confidence)
    for name, reason in result.failed_sources.items():
        log.warn(f"Source {name} failed: {reason}")

    log.subsection("Tags")
    for i, tag in enumerate(result.tags, 1):
        log.info(f"{i:2d}. {tag.name:<24} {tag.category:<12} {tag.confidence:.2f}  [{tag.source}]")
    for name, reasons in result.rejected.items():
        log.trace(f"rejected {name!r}: {'; '.join(reasons)}")

    if args.json:
        print(json.dumps(_serialize_result(result), indent=2))

    log.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())

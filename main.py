"""
WristType - Tap Typing Prediction for Small Touchscreens

Entry point: self-evaluation and single-phrase typing runs.
"""
import argparse
import logging
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent / "src"))


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="WristType - Tap Typing Prediction",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to config file (default: config.yaml)",
    )

    parser.add_argument(
        "--corpus",
        type=Path,
        action="append",
        default=[],
        help="Extra training text, one sentence per line (repeatable)",
    )

    parser.add_argument(
        "--phrases",
        type=Path,
        default=None,
        help="Phrases to type for evaluation (default: bundled test phrases)",
    )

    parser.add_argument(
        "--type",
        dest="text",
        default=None,
        help="Type a single phrase and show every prediction",
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )

    return parser.parse_args(argv)


def run_type(predictor, text):
    """Type text at key centres, printing each prediction result."""
    for c in text:
        if c == " ":
            result = predictor.on_space()
            print(f"[space] {result.full_text!r}")
        else:
            x, y = predictor.keyboard.key_centre(c)
            result = predictor.on_tap(x, y)
            print(f"[{c}] ({x:4d}, {y:4d}) {result.full_text!r}  {list(result.suggestions)}")

    stats = predictor.on_finish_sentence()
    print("-" * 40)
    print(stats.to_tsv())
    return 0


def run_evaluation(predictor, phrases_path):
    """Type each test phrase and report how many came out right."""
    from prediction.corpus import iter_corpus, load_test_phrases
    from prediction.evaluation import evaluate

    phrases = list(iter_corpus(phrases_path)) if phrases_path else load_test_phrases()
    report = evaluate(predictor, phrases)

    for expected, typed in report.errors:
        print(f"  expected {expected!r}")
        print(f"       got {typed!r}")
    print("-" * 40)
    print(f"Got {report.correct}/{report.total} "
          f"({report.accuracy:.0%}), mean edit distance {report.mean_edit_distance:.2f}")
    return 0


def main(argv=None):
    """Main entry point."""
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    from prediction import WordPredictor, load_config
    config = load_config(args.config)

    # Apply CLI overrides
    config.corpus.extra_paths.extend(str(p) for p in args.corpus)

    print("WristType starting...")
    print(f"  Surface: {config.layout.width}x{config.layout.height}")
    print(f"  Tap flexibility: {config.layout.tap_flexibility}")
    print()

    predictor = WordPredictor(config=config)
    try:
        if args.text is not None:
            return run_type(predictor, args.text)
        return run_evaluation(predictor, args.phrases)
    finally:
        predictor.destroy()


if __name__ == "__main__":
    sys.exit(main())

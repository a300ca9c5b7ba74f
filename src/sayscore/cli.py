"""Command-line interface: lexical, phoneme and audio scoring subcommands."""

import argparse
import json
import logging
import sys
import warnings
from pathlib import Path


def _add_dict_arg(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--dict", dest="dict_path", type=Path, default=None,
                        help="CMUdict-format pronunciation dictionary "
                             "(default: $SAYSCORE_DICT or the bundled starter dictionary)")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments with subcommands."""
    parser = argparse.ArgumentParser(
        prog="sayscore",
        description="Score how well a spoken word matches a target word",
    )
    parser.add_argument("-v", "--verbose", action="store_true", default=False,
                        help="Debug logging, including per-metric breakdowns")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    lexical = subparsers.add_parser(
        "lexical", help="Score a transcribed word against the target spelling",
    )
    lexical.add_argument("transcribed")
    lexical.add_argument("target")
    lexical.add_argument("--json", action="store_true", default=False,
                         help="Print the breakdown as JSON")

    phonemes = subparsers.add_parser(
        "phonemes", help="Show the phoneme tokens for a word",
    )
    phonemes.add_argument("word")
    _add_dict_arg(phonemes)

    compare = subparsers.add_parser(
        "compare", help="Score two space-separated phoneme token strings",
    )
    compare.add_argument("predicted")
    compare.add_argument("target")

    score = subparsers.add_parser(
        "score", help="Score a WAV recording against a target word",
    )
    score.add_argument("wav", type=Path)
    score.add_argument("target")
    score.add_argument("--model", required=True,
                       help="HuggingFace id or local path of the wav2vec2 CTC model")
    score.add_argument("--vocab", type=Path, default=None,
                       help="vocab.json for the model (default: built-in phoneme vocabulary)")
    score.add_argument("--device", default="cpu", choices=["cpu", "cuda"],
                       help="Device for model inference (default: cpu)")
    score.add_argument("--no-normalize", action="store_true", default=False,
                       help="Skip peak normalization before inference")
    _add_dict_arg(score)

    listen = subparsers.add_parser(
        "listen", help="Transcribe a WAV with Whisper and score the word lexically",
    )
    listen.add_argument("wav", type=Path)
    listen.add_argument("target")
    listen.add_argument("--whisper-model", default="tiny",
                        choices=["tiny", "base", "small", "medium"],
                        help="Whisper model size (default: tiny)")

    bench = subparsers.add_parser(
        "bench", help="Benchmark the lexical scorer",
    )
    bench.add_argument("--iterations", type=int, nargs="+", default=[100, 1000],
                       help="Iteration counts to run (default: 100 1000)")

    args = parser.parse_args(argv)
    if args.command is None:
        parser.print_help()
        sys.exit(1)
    return args


def _load_dictionary(path: Path | None):
    from sayscore.phonemes.dictionary import PronunciationDictionary

    if path is None:
        return PronunciationDictionary.default()
    if not path.exists():
        print(f"Error: file not found: {path}", file=sys.stderr)
        sys.exit(1)
    return PronunciationDictionary.from_file(path)


def _run_lexical(args: argparse.Namespace) -> None:
    from sayscore.scoring.lexical import lexical_breakdown

    breakdown = lexical_breakdown(args.transcribed, args.target)
    if args.json:
        print(json.dumps(breakdown.to_dict(), indent=2))
    else:
        print(breakdown.format())


def _run_phonemes(args: argparse.Namespace) -> None:
    dictionary = _load_dictionary(args.dict_path)
    codes = dictionary.lookup(args.word)
    if codes is None:
        print(f"'{args.word}' is not in the dictionary", file=sys.stderr)
        sys.exit(1)
    print(f"ARPABET: {' '.join(codes)}")
    print(f"Tokens:  {' '.join(dictionary.to_phoneme_tokens(codes))}")


def _run_compare(args: argparse.Namespace) -> None:
    from sayscore.scoring.phoneme import score_phoneme

    _, breakdown = score_phoneme(args.predicted, args.target)
    print(breakdown.format())


def _run_score(args: argparse.Namespace) -> None:
    from sayscore.acoustic import get_acoustic_model
    from sayscore.engine import ScoringOrchestrator
    from sayscore.phonemes.vocabulary import DEFAULT_VOCABULARY, VocabularyTable

    if not args.wav.exists():
        print(f"Error: file not found: {args.wav}", file=sys.stderr)
        sys.exit(1)

    dictionary = _load_dictionary(args.dict_path)
    vocab = VocabularyTable.from_json(args.vocab) if args.vocab else DEFAULT_VOCABULARY
    model = get_acoustic_model("wav2vec2", model_id=args.model, device=args.device)
    engine = ScoringOrchestrator(
        model, dictionary, vocab=vocab, normalize_audio=not args.no_normalize,
    )

    evaluation = engine.evaluate_wav(args.wav.read_bytes(), args.target)
    if not evaluation.ok:
        print(f"Error: {evaluation.error}", file=sys.stderr)
        sys.exit(1)

    print(f"Target:    {args.target} [{' '.join(evaluation.target_tokens)}]")
    print(f"Predicted: [{' '.join(evaluation.predicted_tokens)}]")
    print(evaluation.breakdown.format())


def _run_listen(args: argparse.Namespace) -> None:
    from sayscore.analysis import prepare_for_model, read_wav
    from sayscore.errors import SayScoreError
    from sayscore.scoring.lexical import lexical_breakdown
    from sayscore.transcribe import transcribe_word

    if not args.wav.exists():
        print(f"Error: file not found: {args.wav}", file=sys.stderr)
        sys.exit(1)

    try:
        buffer = read_wav(args.wav)
    except SayScoreError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    heard = transcribe_word(prepare_for_model(buffer), model_name=args.whisper_model)
    print(f"Heard: '{heard}'")
    print(lexical_breakdown(heard, args.target).format())


def _run_bench(args: argparse.Namespace) -> None:
    from sayscore.bench import (
        DEFAULT_PAIRS,
        RANKING_PAIRS,
        check_determinism,
        check_range,
        check_ranking,
        run_benchmark,
    )
    from sayscore.scoring.lexical import lexical_breakdown

    print("=== Deterministic output ===")
    print("OK" if check_determinism("apple", "apple") else "FAIL: scores differ across runs")

    print("\n=== Ranking ===")
    ordered, scores = check_ranking()
    for (transcribed, target), score in zip(RANKING_PAIRS, scores):
        print(f"'{transcribed}' -> '{target}': {score:.1f}/100")
    print("OK" if ordered else "FAIL: ranking out of order")

    print("\n=== Valid range ===")
    edge_pairs = [
        ("", "test"), ("a", "abbreviation"),
        ("supercalifragilisticexpialidocious", "super"),
        (None, "apple"), ("apple", None), (None, None),
    ]
    print("OK" if check_range(edge_pairs) else "FAIL: score outside 0-100")

    print("\n=== Throughput ===")
    for iterations in args.iterations:
        print(run_benchmark(DEFAULT_PAIRS, iterations).summary())
        print()

    print("--- Detailed breakdown ---")
    print(lexical_breakdown("aple", "apple").format())


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint."""
    args = parse_args(argv)

    level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(level=level, format="%(name)s %(levelname)s: %(message)s")

    if not args.verbose:
        # Silence noisy third-party warnings
        warnings.filterwarnings("ignore", message="FP16 is not supported on CPU")
        logging.getLogger("transformers").setLevel(logging.ERROR)
        logging.getLogger("huggingface_hub").setLevel(logging.ERROR)

    if args.command == "lexical":
        _run_lexical(args)
    elif args.command == "phonemes":
        _run_phonemes(args)
    elif args.command == "compare":
        _run_compare(args)
    elif args.command == "score":
        _run_score(args)
    elif args.command == "listen":
        _run_listen(args)
    elif args.command == "bench":
        _run_bench(args)


if __name__ == "__main__":
    main()

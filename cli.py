import json
import os
import argparse
import logging
from functools import partial
from argparse import RawTextHelpFormatter
from canto_annotate.annotator import Annotator, to_yale_diacritics, to_yale_numeric
from canto_annotate.benchmarks import benchmarks
from canto_annotate.data import DEFAULT_DICT_DIR, build_trie


# Cleaner help display
MyFormatter = partial(RawTextHelpFormatter, max_help_position=70, width=100)


def read_inputs(arg):
    """Read a .json list of strings, or treat the argument itself as the only input."""
    if os.path.isfile(arg) and arg.lower().endswith('.json'):
        with open(arg, "r", encoding="utf-8") as f:
            return json.load(f), True
    return [arg], False


def format_token(token):
    jyutping = token.jyutping or ""
    yale = " ".join(token.yale) if token.yale else ""
    return f"{token.word}\t{jyutping}\t{yale}"


# Defines the CLI
def main(argv=None):
    parser = argparse.ArgumentParser(
        prog="cli.py",
        description=(
            "Cantonese Annotation CLI\n\n"
            "Segment Cantonese text with Jyutping and Yale readings, or convert Jyutping to Yale.\n"
        ),
        formatter_class=MyFormatter,
        epilog=(
            "Usage examples:\n\n"
            "Annotation:\n"
            "  Annotate a sentence:\n"
            "    python cli.py --annotate \"我係好學生\"\n"
            "  Annotate a .json list of sentences (writes <name>.annotated.json):\n"
            "    python cli.py --annotate data/test.json\n"
            "  Print raw JSON records:\n"
            "    python cli.py --annotate \"香港\" --json\n\n"
            "Conversion:\n"
            "  Jyutping to Yale with tone marks:\n"
            "    python cli.py --yale \"gwong2 dung1 waa2\"\n"
            "  Jyutping to Yale with tone numbers:\n"
            "    python cli.py --yale \"gwong2 dung1 waa2\" --numeric\n\n"
            "Benchmarking:\n"
            "  Benchmark annotation on a .json list with a custom dictionary:\n"
            "    python cli.py --dict-dir my_dict --benchmark data/test.json\n"
        )
    )

    # Annotate a string or a list of strings in a .json file
    parser.add_argument(
        "-a", "--annotate",
        type=str,
        metavar="TEXT",
        help="string to annotate or path to .json file of strings"
    )

    # Print JSON instead of a table
    parser.add_argument(
        "--json",
        action="store_true",
        help="with --annotate, print the annotation as JSON records"
    )

    # Jyutping to Yale
    parser.add_argument(
        "-y", "--yale",
        type=str,
        metavar="JYUTPING",
        help="convert space-separated Jyutping syllables to Yale"
    )

    parser.add_argument(
        "-n", "--numeric",
        action="store_true",
        help="with --yale, keep tone numbers instead of diacritics"
    )

    # Dictionary location
    parser.add_argument(
        "-d", "--dict-dir",
        type=str,
        metavar="PATH",
        default=DEFAULT_DICT_DIR,
        help="directory holding chars.tsv, words.tsv, lettered.tsv and freq.txt (default: bundled dictionary)"
    )

    # Benchmark the annotator
    parser.add_argument(
        "-b", "--benchmark",
        type=str,
        metavar="INPUT",
        help="benchmark segmentation on a string or a .json list of strings"
    )

    parser.add_argument(
        "--log-level",
        type=str,
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="logging level (default: WARNING)"
    )

    # Store the arguments so that we can use them
    args = parser.parse_args(argv)

    logging.basicConfig(level=getattr(logging, args.log_level), format="%(levelname)s:%(name)s:%(message)s")

    if not (args.annotate or args.yale or args.benchmark):
        parser.error("one of --annotate, --yale or --benchmark is required")


    # CONVERSION
    # No dictionary needed
    if args.yale:
        if args.numeric:
            print(to_yale_numeric(args.yale))
        else:
            print(to_yale_diacritics(args.yale))

    if not (args.annotate or args.benchmark):
        return


    # LOAD DICTIONARY
    if not os.path.isdir(args.dict_dir):
        parser.error(f"Dictionary directory not found: {args.dict_dir}")
    trie = build_trie(args.dict_dir, progress=True)
    annotator = Annotator(trie)
    print(f"Loaded dictionary with {len(trie)} entries from {args.dict_dir}")


    # ANNOTATION
    if args.annotate:
        inputs, from_file = read_inputs(args.annotate)

        output = []
        for text in inputs:
            tokens = annotator.annotate(text)
            records = [token.to_dict() for token in tokens]
            output.append(records)
            if args.json:
                print(json.dumps(records, ensure_ascii=False))
            else:
                for token in tokens:
                    print(format_token(token))

        # If input was from a .json file, write annotated output to a .json file
        if from_file:
            out_path = args.annotate[:-len('.json')] + '.annotated.json'
            with open(out_path, 'w', encoding='utf-8') as f:
                json.dump(output, f, ensure_ascii=False, indent=2)
            print(f"Annotated output written to {out_path}")


    # BENCHMARKING STAGE
    if args.benchmark:
        test_inputs, _ = read_inputs(args.benchmark)
        print(f"Benchmarking on {len(test_inputs)} input(s)...")
        benchmarks(annotator, test_inputs)
        print()


# Runs the CLI
if __name__ == "__main__":
    main()

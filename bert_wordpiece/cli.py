import json
import os
import argparse
from functools import partial
from argparse import RawTextHelpFormatter
from transformers import AutoTokenizer
from bert_wordpiece import BertTokenizer, TokenizerError
from bert_wordpiece.benchmarks import benchmarks


# Cleaner help display
MyFormatter = partial(RawTextHelpFormatter, max_help_position=70, width=100)


def read_inputs(arg):
    """Return the list of sentences in a .json file, or [arg] if arg is a plain string."""
    if os.path.isfile(arg) and arg.lower().endswith('.json'):
        with open(arg, "r", encoding="utf-8") as f:
            inputs = json.load(f)
        if not isinstance(inputs, list) or not all(isinstance(text, str) for text in inputs):
            raise ValueError(f"{arg} must contain a JSON list of strings")
        return inputs
    return [arg]


def parse_ids(arg):
    """Parse IDs separated by spaces and/or commas."""
    return [int(value) for value in arg.replace(",", " ").split()]


def build_parser():
    parser = argparse.ArgumentParser(
        prog="bert-wordpiece",
        description=(
            "BERT WordPiece Tokenizer CLI\n\n"
            "A command-line tool to tokenize, encode and decode text with a BERT vocabulary,\n"
            "and to benchmark the tokenizer against HuggingFace reference tokenizers.\n"
        ),
        formatter_class=MyFormatter,
        epilog=(
            "Usage examples:\n\n"
            "Tokenization:\n"
            "  Tokenize a single sentence:\n"
            "    bert-wordpiece --vocab vocab.txt --tokenize \"Hello world.\"\n"
            "  Tokenize a .json list of sentences:\n"
            "    bert-wordpiece --vocab vocab.txt --tokenize data/test.json\n"
            "  Use the vocabulary of a HuggingFace tokenizer:\n"
            "    bert-wordpiece --huggingface bert-base-uncased --tokenize \"Hello world.\"\n\n"
            "Encoding and decoding:\n"
            "    bert-wordpiece --vocab vocab.txt --encode \"Hello world.\"\n"
            "    bert-wordpiece --vocab vocab.txt --decode \"7592 2088 1012\"\n\n"
            "Benchmarking:\n"
            "  Benchmark on a .json list:\n"
            "    bert-wordpiece --pretrained my_tokenizer --benchmark data/corpus.json\n"
            "  Compare against a HuggingFace tokenizer:\n"
            "    bert-wordpiece --pretrained my_tokenizer --benchmark data/corpus.json --reference bert-base-uncased\n"
            "  Only check token sequence parity:\n"
            "    bert-wordpiece --pretrained my_tokenizer --benchmark data/corpus.json --reference bert-base-uncased --compare\n\n"
            "Saving:\n"
            "    bert-wordpiece --huggingface bert-base-uncased --save my_tokenizer\n"
        )
    )

    # Where the vocabulary comes from
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument(
        "--vocab",
        type=str,
        metavar="PATH",
        help="path to a vocab.txt (one token per line) or vocab.json file"
    )
    source.add_argument(
        "--pretrained",
        type=str,
        metavar="PATH",
        help="load a tokenizer saved with --save from the specified directory"
    )
    source.add_argument(
        "--huggingface",
        type=str,
        metavar="HF_TOKENIZER",
        help="use the vocabulary of a HuggingFace tokenizer (e.g. 'bert-base-uncased')"
    )

    parser.add_argument(
        "--cased",
        action="store_true",
        help="do not lowercase the input text"
    )

    # Tokenize a string or a list of strings in a .json file
    parser.add_argument(
        "--tokenize",
        type=str,
        metavar="TEST_DATA",
        help="string to tokenize or path to .json file for tokenization"
    )

    parser.add_argument(
        "--encode",
        type=str,
        metavar="TEXT",
        help="string to tokenize and encode into vocabulary IDs"
    )

    parser.add_argument(
        "--decode",
        type=str,
        metavar="IDS",
        help="space or comma separated IDs to decode and detokenize"
    )

    # Benchmark the tokenizer
    parser.add_argument(
        "-b", "--benchmark",
        type=str,
        metavar="INPUT",
        help="benchmark the tokenizer on a string or a .json list of strings"
    )

    parser.add_argument(
        "-r", "--reference",
        type=str,
        nargs="+",
        metavar="HF_TOKENIZER",
        default=[],
        help="with --benchmark, HuggingFace tokenizer(s) to compare against"
    )

    parser.add_argument(
        "-c", "--compare",
        action="store_true",
        help="with --benchmark and --reference, only run the comparisons"
    )

    parser.add_argument(
        "--save",
        type=str,
        metavar="PATH",
        help="save the vocabulary and configuration to the specified directory"
    )

    return parser


def load_tokenizer(args):
    """Create the tokenizer selected on the command line."""
    # --cased only overrides the source's setting when given
    options = {"lowercase": False} if args.cased else {}
    if args.vocab:
        return BertTokenizer.from_vocab_file(args.vocab, **options)
    if args.pretrained:
        return BertTokenizer.load_resources(args.pretrained, **options)
    return BertTokenizer.from_huggingface(args.huggingface, **options)


# Defines the CLI
def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.compare and not (args.benchmark is not None and args.reference):
        parser.error("--compare requires --benchmark and --reference")
    if args.reference and args.benchmark is None:
        parser.error("--reference requires --benchmark")

    try:
        tokenizer = load_tokenizer(args)
        print(f"Loaded {type(tokenizer).__name__} with {tokenizer.vocab_size} tokens")

        # TOKENIZATION
        if args.tokenize is not None:
            inputs = read_inputs(args.tokenize)
            output = []
            for text in inputs:
                tokens = tokenizer.tokenize(text)
                print(tokens)
                output.append(tokens)

            # If input was from a .json file, write tokenized output to a .json file
            if os.path.isfile(args.tokenize) and args.tokenize.lower().endswith('.json'):
                out_path = args.tokenize[:-len('.json')] + '.tokens.json'
                with open(out_path, 'w', encoding='utf-8') as f:
                    json.dump(output, f, ensure_ascii=False, indent=2)
                print(f"Tokenized output written to {out_path}")

        # ENCODING
        if args.encode is not None:
            tokens = tokenizer.tokenize(args.encode)
            print(tokens)
            print(tokenizer.encode(tokens))

        # DECODING
        if args.decode is not None:
            try:
                ids = parse_ids(args.decode)
            except ValueError:
                parser.error(f"--decode expects integer IDs, got {args.decode!r}")
            tokens = tokenizer.decode(ids)
            print(tokens)
            print(tokenizer.detokenize(tokens))

        # BENCHMARKING
        if args.benchmark is not None:
            test_inputs = read_inputs(args.benchmark)
            references = [AutoTokenizer.from_pretrained(name) for name in args.reference]
            print(f"Benchmarking on {len(test_inputs)} sentence(s)...")
            benchmarks(
                tokenizer=tokenizer,
                test_corpus=test_inputs,
                reference_tokenizers=references,
                compare_only=args.compare
            )
            print()

        # Save resources if requested with --save flag
        if args.save:
            tokenizer.save_resources(args.save)
            print(f"Saved vocabulary and configuration to {args.save}")

    except (TokenizerError, ValueError, OSError) as e:
        parser.exit(1, f"{parser.prog}: error: {e}\n")

    return 0


# Runs the CLI
if __name__ == "__main__":
    main()

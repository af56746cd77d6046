"""
This program downloads, formats and saves as json the evaluation corpus used to benchmark the tokenizer.
By default it uses the English Wikitext-2 corpus; any text dataset on HuggingFace can be used instead.
"""

import argparse
import json
import os
from datasets import load_dataset
from typing import Dict, List, Optional, Any

def build_dataset(dataset_splits: Dict[str, Any], feature_name: str, num_examples: Optional[int] = None) -> List[str]:
    """
    Process and combine multiple dataset splits into a single list of text samples.

    Args:
        dataset_splits (Dict[str, Dataset]): Dictionary of dataset splits (e.g., 'train', 'test', 'validation').
        feature_name (str): The key used to extract text from each dataset example.
        num_examples (Optional[int]): Maximum number of examples to include.

    Returns:
        List[str]: A list of non-blank text strings, stripped of surrounding whitespace.
    """

    clean_dataset = []

    for _, dataset in dataset_splits.items():
        for example in dataset:
            value = example.get(feature_name)
            # Skip missing and blank lines
            if value is None or not value.strip():
                continue
            clean_dataset.append(value.strip())
            # Stop early if the number of desired examples is reached
            if num_examples is not None and len(clean_dataset) >= num_examples:
                return clean_dataset

    return clean_dataset

def main() -> None:
    """
    Loads the requested dataset splits, combines them, and saves them as a JSON file.
    """
    parser = argparse.ArgumentParser(description="Build a JSON evaluation corpus from a HuggingFace dataset.")
    parser.add_argument("--dataset", default="wikitext", help="dataset name on HuggingFace (default: wikitext)")
    parser.add_argument("--name", default="wikitext-2-raw-v1", help="dataset configuration name")
    parser.add_argument("--feature", default="text", help="feature holding the text (default: text)")
    parser.add_argument("--splits", nargs="+", default=["train", "test", "validation"], help="splits to combine")
    parser.add_argument("--num-examples", type=int, default=5000, help="maximum number of sentences")
    parser.add_argument("--output", default="data/corpus.json", help="output .json path")
    args = parser.parse_args()

    dataset_splits = {}
    for split in args.splits:
        dataset_splits[split] = load_dataset(args.dataset, name=args.name, split=split)

    combined = build_dataset(dataset_splits, feature_name=args.feature, num_examples=args.num_examples)
    print("Splits combined." if combined else "No data loaded.")

    # Ensure the output directory exists
    output_dir = os.path.dirname(args.output)
    if output_dir:
        os.makedirs(output_dir, exist_ok=True)

    with open(args.output, 'w', encoding='utf-8') as f:
        json.dump(combined, f, ensure_ascii=False, indent=2)
    print(f"Saved {len(combined)} examples to {args.output}")

if __name__ == '__main__':
    main()

"""
Benchmarks to evaluate a BERT tokenizer:

1.  avg_tokens_per_sentence:
       Compute the average number of tokens per sentence.
2.  avg_tokens_per_word:
       Compute the average number of word pieces per word.
3.  subword_fragmentation_rate:
       Measure the percentage of unique words split into multiple word pieces.
4.  vocabulary_coverage_rate:
       Calculate the percentage of unique words recognized as single tokens.
5.  unknown_rate:
       Measure the percentage of tokens that are the unknown token.
6.  compression_rate:
       Determine the average number of characters per token.
7.  normalized_sequence_length:
       Compute the ratio of the number of tokens to the number of characters.
8.  token_sequence_equivalence:
       Compare two tokenizers on positional agreement, token overlap, and word-level subword match.
9.  reference_parity:
       Count the sentences a tokenizer splits exactly like a reference tokenizer.
10. tokenization_performance:
       Evaluate tokenization speed and latency.
11. zipf_distribution:
       Assess how closely token frequency follows Zipf's law.
12. benchmarks:
       Run all benchmarks and print a summary of results to the console.
"""

import math
from timeit import default_timer as timer
from collections import Counter
from typing import List, Tuple, Dict, Any, Optional

from tqdm import tqdm


def _strip_continuation(tokens: List[str]) -> List[str]:
    return [token[2:] if token.startswith("##") else token for token in tokens]


def _unknown_token(tokenizer: Any) -> str:
    # Hugging Face tokenizers name it `unk_token`
    try:
        return tokenizer.unknown_token
    except (AttributeError, NotImplementedError):
        return getattr(tokenizer, "unk_token", None) or "[UNK]"


def avg_tokens_per_sentence(tokenized_sents: List[List[str]]) -> float:
    """
    Compute the average number of tokens per sentence from pre-tokenized data.
    Args:
        tokenized_sents (List[List[str]]): List of tokenized sentences.
    Returns:
        float: Average number of tokens per sentence.
    """
    if not tokenized_sents:
        return 0.0
    return sum(len(ts) for ts in tokenized_sents) / len(tokenized_sents)


def avg_tokens_per_word(tokenized_words: Dict[str, List[str]]) -> float:
    """
    Compute the average number of word pieces per word from pre-tokenized words.
    Args:
        tokenized_words (Dict[str, List[str]]): Mapping from word to its tokenized form.
    Returns:
        float: Average number of tokens per word.
    """
    if not tokenized_words:
        return 0.0
    return sum(len(ws) for ws in tokenized_words.values()) / len(tokenized_words)


def normalized_sequence_length(total_tokens: int, total_chars: int) -> float:
    """
    Compute normalized sequence length: total tokens divided by total characters.
    Args:
        total_tokens (int): Total number of tokens.
        total_chars (int): Total number of characters.
    Returns:
        float: Total tokens divided by total characters.
    """
    return total_tokens / total_chars if total_chars else float('inf')


def subword_fragmentation_rate(tokenized_words: Dict[str, List[str]]) -> float:
    """
    Compute the subword fragmentation rate from pre-tokenized words.
    Args:
        tokenized_words (Dict[str, List[str]]): Mapping from word to its tokenized form.
    Returns:
        float: Percentage of unique words split into multiple word pieces.
    """
    if not tokenized_words:
        return 0.0
    split_words = sum(1 for ws in tokenized_words.values() if len(ws) > 1)
    return split_words / len(tokenized_words) * 100


def vocabulary_coverage_rate(tokenized_words: Dict[str, List[str]], unknown_token: Optional[str] = None) -> float:
    """
    Compute vocabulary coverage from pre-tokenized words.
    Args:
        tokenized_words (Dict[str, List[str]]): Mapping from word to its tokenized form.
        unknown_token (str, optional): A word tokenized as only this token is not covered.
    Returns:
        float: Percentage of unique words tokenized as exactly one known token.
    """
    if not tokenized_words:
        return 0.0
    covered = sum(1 for ws in tokenized_words.values() if len(ws) == 1 and ws[0] != unknown_token)
    return covered / len(tokenized_words) * 100


def unknown_rate(tokenized_sents: List[List[str]], unknown_token: str) -> float:
    """
    Compute the share of tokens that are the unknown token.
    Args:
        tokenized_sents (List[List[str]]): List of tokenized sentences.
        unknown_token (str): The tokenizer's unknown token.
    Returns:
        float: Percentage of all tokens equal to `unknown_token`.
    """
    total = sum(len(ts) for ts in tokenized_sents)
    if not total:
        return 0.0
    unknown = sum(1 for ts in tokenized_sents for token in ts if token == unknown_token)
    return unknown / total * 100


def compression_rate(total_chars: int, tokenized_sents: List[List[str]]) -> float:
    """
    Compute the compression rate: ratio of total non-space characters
    to total number of tokens, using pre-tokenized sentences.
    Args:
        total_chars (int): Total number of non-space characters.
        tokenized_sents (List[List[str]]): List of tokenized sentences.
    Returns:
        float: Compression rate (characters per token).
    """
    total_subs = sum(len(ts) for ts in tokenized_sents)
    return total_chars / total_subs if total_subs else float('inf')


def token_sequence_equivalence(
    tokenizer1: Any,
    tokenizer2: Any,
    corpus: List[str]
) -> Tuple[int, int, float, int, float, int, int, float]:
    """
    Compute equivalence metrics between two tokenizers over a list of sentences.

    Args:
        tokenizer1 (Any): First tokenizer with a `tokenize` method.
        tokenizer2 (Any): Second tokenizer with a `tokenize` method.
        corpus (List[str]): List of input sentences.

    Returns:
        Tuple containing:
            total_pos_matches (int): Tokens matching at the same position.
            total_positions (int): Total positions compared.
            positional_rate (float): Percentage of positional matches.
            total_unordered_matches (int): Tokens matching regardless of position.
            unordered_rate (float): Percentage of unordered matches.
            total_word_matches (int): Words sharing at least one word piece.
            total_words (int): Total words across all sentences.
            word_match_rate (float): Percentage of words with ≥1 shared word piece.
    """
    total_pos_matches = 0
    total_positions = 0
    total_unordered_matches = 0
    total_words = 0
    total_word_matches = 0

    for sentence in corpus:
        # 1. Tokenize with both tokenizers and strip '##' from continuation pieces
        tokens1 = _strip_continuation(tokenizer1.tokenize(sentence))
        tokens2 = _strip_continuation(tokenizer2.tokenize(sentence))

        # 2. Compare tokens at same positions, up to the length of the shortest sequence
        n = min(len(tokens1), len(tokens2))
        total_pos_matches += sum(1 for i in range(n) if tokens1[i] == tokens2[i])
        total_positions += n

        # 3. Compare unordered token overlap
        freq1 = Counter(tokens1)
        freq2 = Counter(tokens2)
        total_unordered_matches += sum(min(freq1[token], freq2[token]) for token in (freq1.keys() & freq2.keys()))

        # 4. For each word, check if both tokenizers share at least one word piece
        words = sentence.split()
        total_words += len(words)
        for word in words:
            sub1 = _strip_continuation(tokenizer1.tokenize(word))
            sub2 = _strip_continuation(tokenizer2.tokenize(word))
            if set(sub1) & set(sub2):
                total_word_matches += 1

    positional_rate = (total_pos_matches / total_positions * 100) if total_positions else 0.0
    unordered_rate = (total_unordered_matches / total_positions * 100) if total_positions else 0.0
    word_match_rate = (total_word_matches / total_words * 100) if total_words else 0.0

    return (
        total_pos_matches,
        total_positions,
        positional_rate,
        total_unordered_matches,
        unordered_rate,
        total_word_matches,
        total_words,
        word_match_rate
    )


def reference_parity(
    tokenizer: Any,
    reference: Any,
    corpus: List[str],
    max_examples: int = 5,
    progress: bool = False
) -> Dict[str, Any]:
    """
    Check that a tokenizer produces exactly the reference tokenizer's token sequences.

    Args:
        tokenizer (Any): Tokenizer with a `tokenize` method.
        reference (Any): Reference tokenizer with a `tokenize` method (e.g. a Hugging Face BertTokenizer).
        corpus (List[str]): List of input sentences.
        max_examples (int): Number of mismatching sentences to keep.
        progress (bool): Show a progress bar.

    Returns:
        Dict[str, Any]: 'matches', 'total', 'parity_rate' (percentage) and 'mismatches',
        a list of (sentence, tokens, reference_tokens) tuples.
    """
    matches = 0
    mismatches = []
    for sentence in tqdm(corpus, desc="Reference parity", disable=not progress):
        tokens = list(tokenizer.tokenize(sentence))
        expected = list(reference.tokenize(sentence))
        if tokens == expected:
            matches += 1
        elif len(mismatches) < max_examples:
            mismatches.append((sentence, tokens, expected))

    return {
        "matches": matches,
        "total": len(corpus),
        "parity_rate": matches / len(corpus) * 100 if corpus else 0.0,
        "mismatches": mismatches,
    }


def tokenization_performance(tokenizer: Any, corpus: List[str]) -> Dict[str, float]:
    """
    Measure tokenization speed for a tokenizer over a list of sentences.

    Args:
        tokenizer (Any): Tokenizer with a `tokenize` method.
        corpus (List[str]): List of input sentences.

    Returns:
        Dict[str, float]: Metrics including total time, throughput and average latency.
    """
    start_time = timer()
    all_tokens = [tokenizer.tokenize(sentence) for sentence in corpus]
    end_time = timer()

    total_time = end_time - start_time
    total_tokens = sum(len(tokens_in_sentence) for tokens_in_sentence in all_tokens)
    throughput = total_tokens / total_time if total_time > 0 else float('inf')
    avg_latency = total_time / len(corpus) if corpus else 0.0

    return {
        "total_time_s": total_time,
        "throughput_tokens_per_s": throughput,
        "avg_latency_s": avg_latency,
    }


def zipf_distribution(tokenized_sents: List[List[str]]) -> Dict[str, float]:
    """
    Analyze token frequency distribution and compute Zipf's law fit from pre-tokenized sentences.
    Args:
        tokenized_sents (List[List[str]]): List of tokenized sentences.
    Returns:
        Dict[str, float]: Contains 'slope', 'intercept', and 'correlation' of the log-log fit.
    """
    frequency = Counter(tok for seq in tokenized_sents for tok in seq)
    frequency_sorted = [count for _, count in frequency.most_common()]
    n = len(frequency_sorted)
    if n == 0:
        return {"slope": 0.0, "intercept": 0.0, "correlation": 0.0}

    log_ranks = [math.log(r) for r in range(1, n + 1)]
    log_freqs = [math.log(f) for f in frequency_sorted]
    mean_x = sum(log_ranks) / n
    mean_y = sum(log_freqs) / n
    cov = sum((x - mean_x) * (y - mean_y) for x, y in zip(log_ranks, log_freqs))
    var_x = sum((x - mean_x) ** 2 for x in log_ranks)
    var_y = sum((y - mean_y) ** 2 for y in log_freqs)
    slope = cov / var_x if var_x else 0.0
    intercept = mean_y - slope * mean_x
    correlation = cov / math.sqrt(var_x * var_y) if var_x and var_y else 0.0
    return {"slope": slope, "intercept": intercept, "correlation": correlation}


def tokenization_metrics(
    tokenizer: Any,
    corpus: List[str],
    tokenized_sents: Optional[List[List[str]]] = None
) -> Dict[str, float]:
    """
    Compute every corpus-level metric for one tokenizer.

    Args:
        tokenizer (Any): Tokenizer with a `tokenize` method and, optionally, an `unknown_token`.
        corpus (List[str]): List of input sentences.
        tokenized_sents (List[List[str]], optional): `corpus` already tokenized by `tokenizer`.

    Returns:
        Dict[str, float]: Metric name to value.
    """
    unknown_token = _unknown_token(tokenizer)
    if tokenized_sents is None:
        tokenized_sents = [tokenizer.tokenize(s) for s in corpus]
    unique_words = {w for s in corpus for w in s.split()}
    tokenized_words = {w: tokenizer.tokenize(w) for w in unique_words}
    total_chars = sum(len(s.replace(' ', '')) for s in corpus)
    total_tokens = sum(len(ts) for ts in tokenized_sents)

    return {
        "avg_tokens_per_sentence": avg_tokens_per_sentence(tokenized_sents),
        "avg_tokens_per_word": avg_tokens_per_word(tokenized_words),
        "compression_rate": compression_rate(total_chars, tokenized_sents),
        "normalized_sequence_length": normalized_sequence_length(total_tokens, total_chars),
        "subword_fragmentation_rate": subword_fragmentation_rate(tokenized_words),
        "vocabulary_coverage_rate": vocabulary_coverage_rate(tokenized_words, unknown_token),
        "unknown_rate": unknown_rate(tokenized_sents, unknown_token),
    }


def _print_metrics(name: str, tokenizer: Any, corpus: List[str]) -> None:
    tokenized_sents = [tokenizer.tokenize(s) for s in corpus]
    metrics = tokenization_metrics(tokenizer, corpus, tokenized_sents)
    print(f"=== Tokenization Metrics for {name} ===")
    print(f"Average tokens per sentence:        {metrics['avg_tokens_per_sentence']:.2f}")
    print(f"Average tokens per word:            {metrics['avg_tokens_per_word']:.2f}")
    print(f"Compression rate (chars per token): {metrics['compression_rate']:.2f}")
    print(f"Normalized sequence length:         {metrics['normalized_sequence_length']:.4f}")
    print(f"Subword fragmentation rate:         {metrics['subword_fragmentation_rate']:.2f}%")
    print(f"Vocabulary coverage rate:           {metrics['vocabulary_coverage_rate']:.2f}%")
    print(f"Unknown token rate:                 {metrics['unknown_rate']:.2f}%")

    print("\n=== Tokenization Performance ===")
    perf = tokenization_performance(tokenizer, corpus)
    print(f"Total time:     {perf['total_time_s']:.4f}s")
    print(f"Throughput:     {perf['throughput_tokens_per_s']:.2f} tokens/s")
    print(f"Avg. latency:   {perf['avg_latency_s']:.6f}s per sentence")

    print("\n=== Zipf Distribution Fit ===")
    zipf_res = zipf_distribution(tokenized_sents)
    print(f"Slope:          {zipf_res['slope']:.4f}")
    print(f"Intercept:      {zipf_res['intercept']:.4f}")
    print(f"Correlation:    {zipf_res['correlation']:.4f}")


def benchmarks(
    tokenizer: Any,
    test_corpus: List[str],
    reference_tokenizers: Optional[List[Any]] = None,
    compare_only: bool = False
) -> None:
    """
    Run all benchmark functions and print results to the console.

    Args:
        tokenizer (Any): Tokenizer with a `tokenize` method.
        test_corpus (List[str]): List of input sentences.
        reference_tokenizers (List[Any], optional): Tokenizers to compare against.
        compare_only (bool): Only run the equivalence and parity comparisons.
    """
    reference_tokenizers = reference_tokenizers or []
    name1 = tokenizer.__class__.__name__

    if compare_only and not reference_tokenizers:
        print("No reference tokenizers provided for comparison.")
        return

    if not compare_only:
        _print_metrics(name1, tokenizer, test_corpus)

    for ref_tok in reference_tokenizers:
        name2 = ref_tok.__class__.__name__
        if not compare_only:
            print()
            _print_metrics(name2, ref_tok, test_corpus)

        (
            total_pos, total_positions, pos_rate,
            total_unord, unord_rate,
            total_wmatch, total_words, wmatch_rate
        ) = token_sequence_equivalence(tokenizer, ref_tok, test_corpus)
        print(f"\n=== Token Sequence Equivalence ({name1} vs {name2}) ===")
        print(f"Positional match rate: {pos_rate:.2f}% ({total_pos}/{total_positions})")
        print(f"Unordered match rate:  {unord_rate:.2f}% ({total_unord}/{total_positions})")
        print(f"Word match rate:       {wmatch_rate:.2f}% ({total_wmatch}/{total_words})")

        parity = reference_parity(tokenizer, ref_tok, test_corpus)
        print(f"\n=== Reference Parity ({name1} vs {name2}) ===")
        print(f"Identical sentences:   {parity['parity_rate']:.2f}% ({parity['matches']}/{parity['total']})")
        for sentence, tokens, expected in parity["mismatches"]:
            print(f"  {sentence!r}")
            print(f"    {name1}: {tokens}")
            print(f"    {name2}: {expected}")

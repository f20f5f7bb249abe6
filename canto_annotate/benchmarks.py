"""
Benchmarks to evaluate the segmenter and the annotator:

1.  avg_tokens_per_sentence:
       Average number of words per sentence, whitespace tokens excluded.
2.  compression_rate:
       Determine the average number of non-space characters per token.
3.  normalized_sequence_length:
       Words per non-space character; 1.0 means nothing was grouped.
4.  reading_coverage_rate:
       Percentage of non-whitespace tokens that received a Jyutping reading.
5.  dictionary_match_rate:
       Percentage of CJK characters covered by multi-character dictionary words.
6.  tokenization_performance:
       Evaluate annotation speed and latency.
7.  zipf_distribution:
       Assess how closely the frequency of dictionary words follows Zipf's law.
8.  benchmarks:
       Run all benchmarks and print a summary of results to the console.
"""

import math
from timeit import default_timer as timer
from collections import Counter
from typing import Any, Dict, Iterator, List

from canto_annotate.utils import Token, is_cjk


def _words(tokenized_sents: List[List[Token]]) -> Iterator[Token]:
    return (t for ts in tokenized_sents for t in ts if not t.word.isspace())


def avg_tokens_per_sentence(tokenized_sents: List[List[Token]]) -> float:
    """
    Average number of words per sentence. Whitespace runs between words are not counted.
    Args:
        tokenized_sents (List[List[Token]]): List of annotated sentences.
    Returns:
        float: Average number of words per sentence.
    """
    if not tokenized_sents:
        return 0.0
    return sum(1 for _ in _words(tokenized_sents)) / len(tokenized_sents)


def compression_rate(total_chars: int, tokenized_sents: List[List[Token]]) -> float:
    """
    Compute the compression rate: ratio of total non-space characters
    to the number of non-space tokens.
    Args:
        total_chars (int): Total number of non-space characters.
        tokenized_sents (List[List[Token]]): List of annotated sentences.
    Returns:
        float: Characters per token.
    """
    total_tokens = sum(1 for _ in _words(tokenized_sents))
    return total_chars / total_tokens if total_tokens else float('inf')


def normalized_sequence_length(tokenized_sents: List[List[Token]]) -> float:
    """
    Words per non-space character, measured on the segmentation itself.

    A segmentation that only used single-character fallbacks scores 1.0;
    every merged word or alpha run pulls the score down.
    Args:
        tokenized_sents (List[List[Token]]): List of annotated sentences.
    Returns:
        float: Words divided by characters, 0.0 for empty input.
    """
    words = list(_words(tokenized_sents))
    total_chars = sum(sum(1 for c in t.word if not c.isspace()) for t in words)
    return len(words) / total_chars if total_chars else 0.0


def reading_coverage_rate(tokenized_sents: List[List[Token]]) -> float:
    """
    Percentage of non-whitespace tokens with a Jyutping reading.
    Args:
        tokenized_sents (List[List[Token]]): List of annotated sentences.
    Returns:
        float: Coverage in percent.
    """
    tokens = list(_words(tokenized_sents))
    if not tokens:
        return 0.0
    return sum(1 for t in tokens if t.jyutping is not None) / len(tokens) * 100


def dictionary_match_rate(tokenized_sents: List[List[Token]]) -> float:
    """
    Percentage of CJK characters that ended up inside a multi-character word with a reading.
    Args:
        tokenized_sents (List[List[Token]]): List of annotated sentences.
    Returns:
        float: Match rate in percent.
    """
    total_cjk = 0
    in_words = 0
    for ts in tokenized_sents:
        for t in ts:
            n_cjk = sum(1 for c in t.word if is_cjk(c))
            total_cjk += n_cjk
            if len(t.word) > 1 and t.jyutping is not None:
                in_words += n_cjk
    return in_words / total_cjk * 100 if total_cjk else 0.0


def tokenization_performance(annotator: Any, input: List[str]) -> Dict[str, float]:
    """
    Measure annotation speed for an annotator over input.

    Args:
        annotator (Any): Object with an `annotate` method returning tokens.
        input (List[str]): List of input sentences.

    Returns:
        Dict[str, float]: Metrics including total time, throughput and average latency.
    """
    start_time = timer()
    all_tokens = [annotator.annotate(sentence) for sentence in input]
    end_time = timer()

    total_time = end_time - start_time
    total_tokens = sum(len(tokens_in_sentence) for tokens_in_sentence in all_tokens)
    throughput = total_tokens / total_time if total_time > 0 else float('inf')
    avg_latency = total_time / len(input) if input else 0.0

    return {
        "total_time_s": total_time,
        "throughput_tokens_per_s": throughput,
        "avg_latency_s": avg_latency,
    }


def zipf_distribution(tokenized_sents: List[List[Token]]) -> Dict[str, float]:
    """
    Fit Zipf's law to the rank/frequency curve of dictionary words.

    Only tokens that received a reading are counted, so punctuation, spaces
    and unknown alpha runs do not distort the curve.
    Args:
        tokenized_sents (List[List[Token]]): List of annotated sentences.
    Returns:
        Dict[str, float]: Contains 'slope', 'intercept' and 'correlation' of the
        log-log fit, plus 'vocabulary', the number of distinct dictionary words.
    """
    frequency = Counter(t.word for t in _words(tokenized_sents) if t.jyutping is not None)
    if not frequency:
        return {"slope": 0.0, "intercept": 0.0, "correlation": 0.0, "vocabulary": 0}

    # Rank 1 is the most frequent word
    points = [(math.log(rank), math.log(count))
              for rank, (_, count) in enumerate(frequency.most_common(), start=1)]
    n = len(points)
    mean_x = sum(x for x, _ in points) / n
    mean_y = sum(y for _, y in points) / n
    cov = sum((x - mean_x) * (y - mean_y) for x, y in points)
    var_x = sum((x - mean_x) ** 2 for x, _ in points)
    var_y = sum((y - mean_y) ** 2 for _, y in points)

    slope = cov / var_x if var_x else 0.0
    return {
        "slope": slope,
        "intercept": mean_y - slope * mean_x,
        "correlation": cov / math.sqrt(var_x * var_y) if var_x and var_y else 0.0,
        "vocabulary": len(frequency),
    }


def benchmarks(annotator: Any, test_corpus: List[str]) -> None:
    """
    Run all benchmark functions and print results to the console.

    Args:
        annotator (Any): Annotator with an `annotate` method.
        test_corpus (List[str]): List of input sentences.
    """
    name = annotator.__class__.__name__

    # Annotate once for the quality metrics
    tokenized_sents = [annotator.annotate(s) for s in test_corpus]
    total_chars = sum(sum(1 for c in s if not c.isspace()) for s in test_corpus)

    print(f"=== Segmentation Metrics for {name} ===")
    print(f"Average words per sentence:         {avg_tokens_per_sentence(tokenized_sents):.2f}")
    print(f"Compression rate (chars per token): {compression_rate(total_chars, tokenized_sents):.2f}")
    print(f"Normalized sequence length:         {normalized_sequence_length(tokenized_sents):.4f}")
    print(f"Reading coverage rate:              {reading_coverage_rate(tokenized_sents):.2f}%")
    print(f"Dictionary match rate:              {dictionary_match_rate(tokenized_sents):.2f}%")

    print("\n=== Annotation Performance ===")
    perf = tokenization_performance(annotator, test_corpus)
    print(f"Total time:     {perf['total_time_s']:.4f}s")
    print(f"Throughput:     {perf['throughput_tokens_per_s']:.2f} tokens/s")
    print(f"Avg. latency:   {perf['avg_latency_s']:.6f}s per sentence")

    print("\n=== Zipf Fit over Dictionary Words ===")
    zipf_res = zipf_distribution(tokenized_sents)
    print(f"Vocabulary:     {zipf_res['vocabulary']}")
    print(f"Slope:          {zipf_res['slope']:.4f}")
    print(f"Intercept:      {zipf_res['intercept']:.4f}")
    print(f"Correlation:    {zipf_res['correlation']:.4f}")

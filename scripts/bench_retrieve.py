#!/usr/bin/env python3
"""Benchmark multi-document retrieval: latency (p50, p95, p99) and QPS.

Usage:
  Start the API (DOCRAG_EMBEDDING_BACKEND=hashing needs no API key):
    docrag serve
  Then:
    export API_URL=http://localhost:8000
    python scripts/bench_retrieve.py [--num-docs 10] [--num-queries 100]
"""
from __future__ import annotations

import argparse
import os
import statistics
import sys
import time

import httpx

_SENTENCES = [
    "Retrieval ranks document chunks by cosine similarity to the query",
    "Each chunk keeps the offsets of the span it covers in the source text",
    "Documents are split on sentence boundaries before they are embedded",
    "The embedding provider turns every chunk into a fixed length vector",
    "Only chunks above the similarity threshold are returned to the caller",
]


def make_documents(num_docs: int, sentences_per_doc: int) -> list[dict]:
    """Synthetic documents with overlapping vocabulary."""
    docs = []
    for i in range(num_docs):
        body = ". ".join(
            f"{_SENTENCES[(i + j) % len(_SENTENCES)]} in document {i}"
            for j in range(sentences_per_doc)
        )
        docs.append({"id": f"doc-{i}", "title": f"Benchmark document {i}", "content": body + "."})
    return docs


def main() -> int:
    parser = argparse.ArgumentParser(description="Benchmark retrieval")
    parser.add_argument("--num-docs", type=int, default=10, help="Documents per request")
    parser.add_argument("--sentences", type=int, default=40, help="Sentences per document")
    parser.add_argument("--num-queries", type=int, default=50, help="Number of retrieval requests")
    parser.add_argument("--output", type=str, default="bench_retrieve.txt", help="Output file path")
    args = parser.parse_args()

    api_url = os.environ.get("API_URL", "http://localhost:8000").rstrip("/")
    payload = {
        "query": "how are chunks ranked by similarity",
        "documents": make_documents(args.num_docs, args.sentences),
    }

    latencies: list[float] = []
    errors = 0
    print(f"Running {args.num_queries} retrieval requests over {args.num_docs} documents...")
    start_total = time.perf_counter()
    with httpx.Client(timeout=60.0) as client:
        for _ in range(args.num_queries):
            t0 = time.perf_counter()
            r = client.post(f"{api_url}/v1/retrieve/documents", json=payload)
            elapsed = time.perf_counter() - t0
            if r.status_code == 200:
                latencies.append(elapsed)
            else:
                errors += 1
    total_elapsed = time.perf_counter() - start_total

    n = len(latencies)
    if n == 0:
        print("No successful retrievals.")
        return 1

    qps = n / total_elapsed
    p50 = statistics.median(latencies) * 1000
    p95 = sorted(latencies)[int(n * 0.95) - 1] * 1000 if n >= 20 else p50
    p99 = sorted(latencies)[int(n * 0.99) - 1] * 1000 if n >= 100 else p95

    summary = (
        f"Retrieval benchmark (documents={args.num_docs}, queries={n}, errors={errors})\n"
        f"  QPS: {qps:.2f}\n"
        f"  Latency: p50={p50:.1f} ms, p95={p95:.1f} ms, p99={p99:.1f} ms\n"
        f"  Total time: {total_elapsed:.2f} s\n"
    )
    print(summary)

    try:
        os.makedirs(os.path.dirname(args.output) or ".", exist_ok=True)
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(summary)
        print(f"Wrote {args.output}")
    except OSError:
        pass

    return 0


if __name__ == "__main__":
    sys.exit(main())

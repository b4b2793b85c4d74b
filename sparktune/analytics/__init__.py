"""Sizing rules that make up the allocation engine.

- Executor sizing (Rule of 5) after per-node reservations
- Memory split into heap, overhead and off-heap
- Cluster totals, parallelism and shuffle partitions
- Critical warnings and optimization tips
- spark-submit flag generation and formula explanations
"""

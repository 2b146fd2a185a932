"""Nearest-neighbor search over a pre-aligned multi-FASTA file.

This package contains reusable modules for:
- FASTA I/O, load-time validation and ID lists
- the in-memory alignment store and subset filtering
- similarity metrics (gap-aware percent identity, Hamming distance)
- exhaustive, thread-parallel nearest-neighbor search
- TSV output
"""

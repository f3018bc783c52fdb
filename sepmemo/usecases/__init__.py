"""Use-case layer for memo handling.

Each module works on domain objects and ports only; no transport I/O.
"""

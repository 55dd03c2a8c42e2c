from __future__ import annotations

from .corpus import generate_block_sources, generate_corpus_files
from .coverage import assert_tiles, flatten_spans

__all__ = ["assert_tiles", "flatten_spans", "generate_block_sources", "generate_corpus_files"]

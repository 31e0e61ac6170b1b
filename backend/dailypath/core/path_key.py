"""Path Key Codec — canonical string identity for a token sequence.

Invariants:
    - Every token is trimmed; case is preserved
    - Tokens joined with PATH_SEPARATOR; injective over trimmed sequences
      as long as no token contains the separator
    - Catalog records, the picker and admin input all go through this codec
"""

from collections.abc import Iterable

from dailypath.core.domain_types import PathKey, PATH_SEPARATOR


def encode_path_key(tokens: Iterable[str]) -> PathKey:
    return PathKey(PATH_SEPARATOR.join(t.strip() for t in tokens))


def normalize_path_key(raw: str) -> PathKey:
    """Re-encode an operator-typed key so it compares equal to catalog keys."""
    return encode_path_key(raw.split(PATH_SEPARATOR))

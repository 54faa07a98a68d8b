"""Pragmatic-order recursion for the Rational Speech Act model.

Each model family defines an nth-order speaker and an nth-order listener
as mutually recursive alternations of row and column normalization:

| Model           | Speaker(n > 0)                          | Listener(n > 0)                          |
|-----------------|-----------------------------------------|------------------------------------------|
| Frank & Goodman | normCols(Listener(n - 1))               | normRows(Speaker(n))                     |
| Blokpoel et al. | normCols(normRows(Speaker(n - 1)))      | normRows(normCols(Listener(n - 1)))      |
| Franke & Degen  | normCols(Listener(n - 1))               | Speaker(n - 1)                           |

All three agree at order 0: the speaker normalizes columns and the
listener normalizes rows.

References:
- Frank, M. C., & Goodman, N. D. (2012). Predicting pragmatic reasoning
  in language games. Science, 336(6084).
- Franke, M., & Degen, J. (2016). Reasoning in reference games.
  PLoS ONE, 11(5).
"""

from __future__ import annotations

from collections.abc import Callable
from enum import Enum
from typing import TYPE_CHECKING

from pragmalab.errors import MalformedInputError

if TYPE_CHECKING:
    from pragmalab.rsa.lexicon import Lexicon

Recursion = Callable[["Lexicon", int], "Lexicon"]


class PragmaticModel(Enum):
    """Named families of speaker/listener recursion."""

    FRANK_GOODMAN = "frank_goodman"
    BLOKPOEL_ET_AL = "blokpoel_et_al"
    FRANKE_DEGEN = "franke_degen"


def _check_order(n: int) -> None:
    if n < 0:
        raise MalformedInputError(f"pragmatic order must be non-negative, got {n}")


# Frank & Goodman (2012)


def frank_goodman_speaker(lexicon: Lexicon, n: int) -> Lexicon:
    _check_order(n)
    if n == 0:
        return lexicon.normalize_columns()
    return frank_goodman_listener(lexicon, n - 1).normalize_columns()


def frank_goodman_listener(lexicon: Lexicon, n: int) -> Lexicon:
    _check_order(n)
    if n == 0:
        return lexicon.normalize_rows()
    return frank_goodman_speaker(lexicon, n).normalize_rows()


# Blokpoel et al. (2020)


def blokpoel_speaker(lexicon: Lexicon, n: int) -> Lexicon:
    _check_order(n)
    result = lexicon.normalize_columns()
    for _ in range(n):
        result = result.normalize_rows().normalize_columns()
    return result


def blokpoel_listener(lexicon: Lexicon, n: int) -> Lexicon:
    _check_order(n)
    result = lexicon.normalize_rows()
    for _ in range(n):
        result = result.normalize_columns().normalize_rows()
    return result


# Franke & Degen (2016)


def franke_degen_speaker(lexicon: Lexicon, n: int) -> Lexicon:
    _check_order(n)
    if n == 0:
        return lexicon.normalize_columns()
    return franke_degen_listener(lexicon, n - 1).normalize_columns()


def franke_degen_listener(lexicon: Lexicon, n: int) -> Lexicon:
    _check_order(n)
    if n == 0:
        return lexicon.normalize_rows()
    # No extra row normalization at higher orders
    return franke_degen_speaker(lexicon, n - 1)


RECURSIONS: dict[PragmaticModel, tuple[Recursion, Recursion]] = {
    PragmaticModel.FRANK_GOODMAN: (frank_goodman_speaker, frank_goodman_listener),
    PragmaticModel.BLOKPOEL_ET_AL: (blokpoel_speaker, blokpoel_listener),
    PragmaticModel.FRANKE_DEGEN: (franke_degen_speaker, franke_degen_listener),
}


def speaker(lexicon: Lexicon, n: int, model: PragmaticModel | None = None) -> Lexicon:
    """Return the nth-order speaker lexicon under ``model``.

    Args:
        lexicon: Literal lexicon to reason over
        n: Order of pragmatic reasoning (>= 0)
        model: Model family; defaults to the lexicon's own model

    Returns:
        Transformed lexicon
    """
    speaker_fn, _ = RECURSIONS[model or lexicon.model]
    return speaker_fn(lexicon, n)


def listener(lexicon: Lexicon, n: int, model: PragmaticModel | None = None) -> Lexicon:
    """Return the nth-order listener lexicon under ``model``.

    Args:
        lexicon: Literal lexicon to reason over
        n: Order of pragmatic reasoning (>= 0)
        model: Model family; defaults to the lexicon's own model

    Returns:
        Transformed lexicon
    """
    _, listener_fn = RECURSIONS[model or lexicon.model]
    return listener_fn(lexicon, n)

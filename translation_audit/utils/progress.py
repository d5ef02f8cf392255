"""Progress bars for long-running history lookups."""

import sys
from typing import Iterable, Iterator, Optional, TypeVar

from tqdm import tqdm

T = TypeVar('T')


def progress_bar(
    iterable: Iterable[T],
    desc: Optional[str] = None,
    total: Optional[int] = None,
    disable: bool = False,
    unit: str = 'it',
) -> Iterator[T]:
    """
    Wrap an iterable in a tqdm progress bar written to stderr.

    The bar is dropped once finished so it does not clutter the summary.

    Example:
        for future in progress_bar(as_completed(futures), desc="Blame", total=len(futures)):
            ...
    """
    if disable:
        return iter(iterable)
    return iter(tqdm(
        iterable,
        desc=desc,
        total=total,
        unit=unit,
        leave=False,
        file=sys.stderr,
    ))

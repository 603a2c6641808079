# bibnet/ingest/normalize.py

from __future__ import annotations

import re
from typing import Optional

from bibnet.config.settings import LabelCase, Settings

_WHITESPACE_RUN = re.compile(r"\s+")


class LabelNormalizer:
    """
    Turn a raw author name or keyword into a node label.

    Upper-casing (the default) folds 'Graph Theory' and 'graph theory' into
    one node. Whitespace cleanup folds 'Jane  Doe ' into 'Jane Doe'.
    """

    def __init__(
        self,
        case: LabelCase = LabelCase.UPPER,
        strip: bool = True,
        collapse_whitespace: bool = True,
    ) -> None:
        self.case = LabelCase(case)
        self.strip = strip
        self.collapse_whitespace = collapse_whitespace

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        case: Optional[LabelCase] = None,
    ) -> "LabelNormalizer":
        return cls(
            case=case or settings.LABEL_CASE,
            strip=settings.STRIP_WHITESPACE,
            collapse_whitespace=settings.STRIP_WHITESPACE,
        )

    def __call__(self, label: str) -> str:
        if self.collapse_whitespace:
            label = _WHITESPACE_RUN.sub(" ", label)
        if self.strip:
            label = label.strip()

        if self.case is LabelCase.UPPER:
            return label.upper()
        if self.case is LabelCase.LOWER:
            return label.lower()
        return label

    def __repr__(self) -> str:
        return (
            f"LabelNormalizer(case={self.case.value!r}, strip={self.strip}, "
            f"collapse_whitespace={self.collapse_whitespace})"
        )

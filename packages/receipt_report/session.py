"""Report session: one loaded receipt list plus the active filter.

A session is plain in-memory state with no globals, so independent reports
never interfere. Totals are recomputed on every call to :meth:`totals`.
"""

from __future__ import annotations

from collections.abc import Iterable

from .aggregate import aggregate
from .filters import filter_receipts
from .ingest.receipts import extract_receipts_from_text
from .ingest.source import EmptySourceError
from .logging_setup import get_logger
from .models import AggregateResult, AllFilter, FilterSpec, Receipt

_logger = get_logger("receipt_report.session")


class ReportSession:
    """Holds the extracted receipts and the current :data:`FilterSpec`.

    Usage
    -----
    session = ReportSession.from_csv_text(text)
    session.apply_filter(MonthFilter(year=2024, month=3))
    totals = session.totals()
    """

    def __init__(self, receipts: Iterable[Receipt]) -> None:
        self._receipts: tuple[Receipt, ...] = tuple(receipts)
        self._filter: FilterSpec = AllFilter()
        self._filtered: list[Receipt] = list(self._receipts)

    @classmethod
    def from_csv_text(cls, csv_text: str | None) -> ReportSession:
        """Extract receipts from raw export text.

        Raises :class:`EmptySourceError` for empty or blank text; an export
        with a header but no receipts gives an empty session instead.
        """

        if csv_text is None or not csv_text.strip():
            raise EmptySourceError("No data available to parse")
        receipts = extract_receipts_from_text(csv_text)
        if not receipts:
            _logger.info("report_session:empty no receipts found in export")
        return cls(receipts)

    @property
    def all_receipts(self) -> list[Receipt]:
        return list(self._receipts)

    @property
    def current_filter(self) -> FilterSpec:
        return self._filter

    @property
    def filtered_receipts(self) -> list[Receipt]:
        return list(self._filtered)

    def apply_filter(self, spec: FilterSpec) -> list[Receipt]:
        """Make ``spec`` the active filter and return the matching receipts."""

        self._filter = spec
        self._filtered = filter_receipts(self._receipts, spec)
        _logger.debug(
            "report_session:filter kind=%s matched=%d total=%d",
            spec.kind,
            len(self._filtered),
            len(self._receipts),
        )
        return self.filtered_receipts

    def clear_filter(self) -> list[Receipt]:
        """Reset to :class:`AllFilter`."""

        return self.apply_filter(AllFilter())

    def totals(self) -> AggregateResult:
        return aggregate(self._filtered)


__all__ = ["ReportSession"]

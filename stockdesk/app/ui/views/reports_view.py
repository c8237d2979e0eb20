from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import Callable

from stockdesk.app.application.state.session_state import SessionState
from stockdesk.app.application.stores.products_store import ProductsStore
from stockdesk.app.application.stores.transactions_store import TransactionsStore
from stockdesk.app.export.csv_exporter import export_report
from stockdesk.app.export.print_report import render_print_html, write_print_html
from stockdesk.app.export.reports import ReportType, build_context, default_range
from stockdesk.app.infrastructure.logging.logger import get_logger, log_action
from stockdesk.app.infrastructure.scheduler import Scheduler
from stockdesk.app.ui.views.base import PageController

logger = get_logger("stockdesk.reports")


class ReportsView(PageController):
    def __init__(
        self,
        session: SessionState,
        products: ProductsStore,
        transactions: TransactionsStore,
        output_dir: str | Path,
        scheduler: Scheduler | None = None,
        flash_seconds: float = 2.0,
        today: Callable[[], date] = date.today,
    ) -> None:
        super().__init__(session, scheduler, flash_seconds)
        self.products = products
        self.transactions = transactions
        self.output_dir = Path(output_dir)
        self.report_type = ReportType.SUMMARY
        self.start_date, self.end_date = default_range(today())

    def set_range(self, start_date: str, end_date: str) -> None:
        self.start_date, self.end_date = start_date, end_date

    def set_report_type(self, report_type: ReportType | str) -> None:
        self.report_type = ReportType(report_type)

    def context(self):
        return build_context(self.products, self.transactions, self.start_date, self.end_date)

    def export_csv(self) -> Path | None:
        path = self._write("export_csv", lambda: export_report(self.report_type, self.context(), self.output_dir))
        if path is not None:
            self.messages.flash_success("Report exported successfully")
        return path

    def print_html(self) -> str:
        return render_print_html(self.report_type, self.context())

    def export_print(self) -> Path | None:
        return self._write("export_print", lambda: write_print_html(self.report_type, self.context(), self.output_dir))

    def _write(self, action: str, write: Callable[[], Path]) -> Path | None:
        try:
            path = write()
        except OSError as error:
            log_action(logger, "reports", action, self.session.role, None, "error", {"error": str(error)})
            self.messages.show_error("Failed to export report")
            return None
        log_action(logger, "reports", action, self.session.role, None, "success", {"path": str(path)})
        return path

from __future__ import annotations

import csv
import io
from pathlib import Path

from stockdesk.app.export.reports import ReportContext, ReportType, display_moment, money


def _writer(buffer: io.StringIO):
    return csv.writer(buffer, quoting=csv.QUOTE_NONNUMERIC, lineterminator="\n")


def _preamble(buffer: io.StringIO, title: str, context: ReportContext, with_range: bool = True) -> None:
    buffer.write(f"{title}\n")
    if with_range:
        buffer.write(f"Date Range: {context.start_date} to {context.end_date}\n")
    buffer.write(f"Generated: {display_moment(context.generated_at)}\n\n")


def summary_csv(context: ReportContext) -> str:
    buffer = io.StringIO()
    _preamble(buffer, "Inventory Summary Report", context)
    writer = _writer(buffer)
    buffer.write("Overall Statistics\n")
    writer.writerow(["Total Products", len(context.products)])
    writer.writerow(["Total Sales", money(context.total_sales)])
    writer.writerow(["Total Purchases", money(context.total_purchases)])
    writer.writerow(["Net Profit", money(context.net_profit)])
    buffer.write("\nLow Stock Products\n")
    writer.writerow(["Name", "SKU", "Stock Level", "Threshold"])
    for product in context.low_stock:
        writer.writerow([product.name, product.sku, product.stock_level, product.min_stock_threshold])
    return buffer.getvalue()


def transactions_csv(context: ReportContext) -> str:
    buffer = io.StringIO()
    _preamble(buffer, "Transaction Report", context)
    writer = _writer(buffer)
    writer.writerow(["Date", "Product Name", "SKU", "Type", "Quantity", "Unit Price", "Total Amount", "User"])
    for row in context.transactions:
        writer.writerow([
            display_moment(row.date),
            row.product_name,
            row.product_sku,
            row.type.value,
            row.quantity,
            money(row.unit_price),
            money(row.total_amount),
            row.user_name,
        ])
    return buffer.getvalue()


def products_csv(context: ReportContext) -> str:
    buffer = io.StringIO()
    _preamble(buffer, "Products Report", context, with_range=False)
    writer = _writer(buffer)
    writer.writerow(["Name", "SKU", "Category", "Supplier", "Unit Price", "Stock Level", "Threshold"])
    for product in context.products:
        writer.writerow([
            product.name,
            product.sku,
            product.category,
            product.supplier,
            money(product.unit_price),
            product.stock_level,
            product.min_stock_threshold,
        ])
    return buffer.getvalue()


_RENDERERS = {
    ReportType.SUMMARY: summary_csv,
    ReportType.TRANSACTIONS: transactions_csv,
    ReportType.PRODUCTS: products_csv,
}


def render_csv(report_type: ReportType | str, context: ReportContext) -> str:
    return _RENDERERS[ReportType(report_type)](context)


def report_filename(report_type: ReportType | str, context: ReportContext) -> str:
    report_type = ReportType(report_type)
    today = context.generated_at.date().isoformat()
    if report_type is ReportType.SUMMARY:
        return f"inventory-summary-{today}.csv"
    if report_type is ReportType.TRANSACTIONS:
        return f"transactions-{context.start_date}-to-{context.end_date}.csv"
    return f"products-{today}.csv"


def export_report(report_type: ReportType | str, context: ReportContext, output_dir: str | Path) -> Path:
    destination = Path(output_dir)
    destination.mkdir(parents=True, exist_ok=True)
    path = destination / report_filename(report_type, context)
    with path.open("w", newline="", encoding="utf-8-sig") as handle:
        handle.write(render_csv(report_type, context))
    return path

from __future__ import annotations

from html import escape
from pathlib import Path

from stockdesk.app.export.reports import ReportContext, ReportType, display_moment, money

PAGE_TEMPLATE = """<!DOCTYPE html>
<html>
  <head>
    <title>Inventory Report</title>
    <style>
      body {{ font-family: Arial, sans-serif; padding: 20px; }}
      h1 {{ color: #2d3748; }}
      table {{ width: 100%; border-collapse: collapse; margin-top: 20px; }}
      th, td {{ border: 1px solid #ddd; padding: 8px; text-align: left; }}
      th {{ background-color: #f7fafc; font-weight: bold; }}
    </style>
  </head>
  <body>
{body}
  </body>
</html>
"""


def _table(headers: list[str], rows: list[list[object]]) -> str:
    head = "".join(f"<th>{escape(h)}</th>" for h in headers)
    body = "".join("<tr>" + "".join(f"<td>{escape(str(cell))}</td>" for cell in row) + "</tr>" for row in rows)
    return f"<table><tr>{head}</tr>{body}</table>"


def _header(title: str, context: ReportContext, with_range: bool = True) -> str:
    parts = [f"<h1>{escape(title)}</h1>"]
    if with_range:
        parts.append(f"<p>Date Range: {escape(context.start_date)} to {escape(context.end_date)}</p>")
    parts.append(f"<p>Generated: {escape(display_moment(context.generated_at))}</p>")
    return "\n".join(parts)


def summary_html(context: ReportContext) -> str:
    stats = (
        "<table>"
        f"<tr><th>Total Products</th><td>{len(context.products)}</td></tr>"
        f"<tr><th>Total Sales</th><td>{money(context.total_sales)}</td></tr>"
        f"<tr><th>Total Purchases</th><td>{money(context.total_purchases)}</td></tr>"
        f"<tr><th>Net Profit</th><td>{money(context.net_profit)}</td></tr>"
        "</table>"
    )
    low_stock = _table(
        ["Name", "SKU", "Stock Level", "Threshold"],
        [[p.name, p.sku, p.stock_level, p.min_stock_threshold] for p in context.low_stock],
    )
    return "\n".join([
        _header("Inventory Summary Report", context),
        "<h2>Statistics</h2>",
        stats,
        f"<h2>Low Stock Products ({len(context.low_stock)})</h2>",
        low_stock,
    ])


def transactions_html(context: ReportContext) -> str:
    table = _table(
        ["Date", "Product", "SKU", "Type", "Quantity", "Amount", "User"],
        [
            [display_moment(t.date), t.product_name, t.product_sku, t.type.value, t.quantity, money(t.total_amount), t.user_name]
            for t in context.transactions
        ],
    )
    return "\n".join([_header("Transaction Report", context), table])


def products_html(context: ReportContext) -> str:
    table = _table(
        ["Name", "SKU", "Category", "Stock Level", "Price"],
        [[p.name, p.sku, p.category, p.stock_level, money(p.unit_price)] for p in context.products],
    )
    return "\n".join([_header("Products Report", context, with_range=False), table])


_RENDERERS = {
    ReportType.SUMMARY: summary_html,
    ReportType.TRANSACTIONS: transactions_html,
    ReportType.PRODUCTS: products_html,
}


def render_print_html(report_type: ReportType | str, context: ReportContext) -> str:
    return PAGE_TEMPLATE.format(body=_RENDERERS[ReportType(report_type)](context))


def write_print_html(report_type: ReportType | str, context: ReportContext, output_dir: str | Path) -> Path:
    destination = Path(output_dir)
    destination.mkdir(parents=True, exist_ok=True)
    stamp = context.generated_at.strftime("%Y%m%d_%H%M%S")
    path = destination / f"{ReportType(report_type).value}-report_{stamp}.html"
    path.write_text(render_print_html(report_type, context), encoding="utf-8")
    return path

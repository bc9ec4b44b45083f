# stockdesk/utils/csv_export.py
import csv
from io import StringIO
from typing import Iterable, Sequence

from fastapi.responses import Response

ANALYTICS_HEADERS = ["Date", "Product", "Brand", "Category", "Quantity", "Unit Price", "Total", "Order ID"]
ORDERS_HEADERS = ["Order Number", "Date", "Product", "Quantity", "Unit Price", "Total Amount", "Status"]


def clean_field(value) -> str:
    # Fields are never quoted, so separators inside values must go
    if value is None:
        return ""
    return str(value).replace(",", ";").replace("\r", " ").replace("\n", " ")


def build_csv(headers: Sequence[str], rows: Iterable[Sequence]) -> str:
    output = StringIO()
    writer = csv.writer(output, quoting=csv.QUOTE_NONE, quotechar=None, lineterminator="\n")
    writer.writerow(headers)
    for row in rows:
        writer.writerow([clean_field(v) for v in row])
    return output.getvalue()


def csv_attachment(content: str, filename: str) -> Response:
    return Response(
        content,
        media_type="text/csv",
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )

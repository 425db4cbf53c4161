from __future__ import annotations

import csv
import io
from typing import Sequence

import pandas as pd

EXPORT_FIELDS = [
    "created_at",
    "student_name",
    "concept",
    "category_name",
    "amount",
    "status",
    "source",
    "incidence",
]

# Column headers shown in the spreadsheet.
EXPORT_HEADERS = {
    "created_at": "Fecha",
    "student_name": "Alumno",
    "concept": "Concepto",
    "category_name": "Categoría",
    "amount": "Importe",
    "status": "Estado",
    "source": "Origen",
    "incidence": "Incidencia",
}


def payments_to_csv(rows: Sequence[dict]) -> bytes:
    """CSV with BOM so spreadsheet apps pick up the accents."""

    out = io.StringIO()
    writer = csv.DictWriter(out, fieldnames=EXPORT_FIELDS, extrasaction="ignore")
    writer.writeheader()
    for row in rows:
        writer.writerow(row)
    return out.getvalue().encode("utf-8-sig")


def payments_to_xlsx(rows: Sequence[dict], *, sheet_name: str = "Pagos") -> bytes:
    df = pd.DataFrame([{k: row.get(k) for k in EXPORT_FIELDS} for row in rows], columns=EXPORT_FIELDS)
    df = df.rename(columns=EXPORT_HEADERS)

    # Built in memory, never written to disk.
    output = io.BytesIO()
    with pd.ExcelWriter(output, engine="openpyxl") as writer:
        df.to_excel(writer, index=False, sheet_name=sheet_name)
    return output.getvalue()

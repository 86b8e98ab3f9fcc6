from __future__ import annotations

import csv
from pathlib import Path
from typing import List, Tuple


def read_csv(csv_path: Path) -> Tuple[List[str], List[List[str]]]:
    """
    Read a UTF-8 CSV file (with or without a byte order mark) into its header and data rows.

    Blank trailing lines are dropped. I/O, decoding and CSV syntax errors
    propagate to the caller.

    Returns:
        Tuple[List[str], List[List[str]]]: (header, rows)
    """
    with open(csv_path, 'r', encoding='utf-8-sig', newline='') as f:
        rows = [row for row in csv.reader(f, strict=True)]
    while rows and not any(cell.strip() for cell in rows[-1]):
        rows.pop()
    if not rows:
        return [], []
    return rows[0], rows[1:]

#!/usr/bin/env python3
"""Sample order file generator.

Generates synthetic order import files (CSV or XLSX) in the import column
layout, together with a matching catalog snapshot YAML, for manual testing
and throughput checks of the validation pipeline.

A configurable share of rows is made invalid (unknown product, bad price,
mismatched pipe counts) so the error paths are exercised as well.
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

import numpy as np
import pandas as pd
import yaml

from order_import.constants import EXPECTED_COLUMNS
from order_import.services.exporter import render_csv


def generate_catalog(products: int, warehouse_id: str, seed: int = 42) -> dict:
    """Catalog snapshot with ``products`` entries stocked in ``warehouse_id``."""
    rng = np.random.default_rng(seed)
    entries = []
    for i in range(1, products + 1):
        entries.append(
            {
                "id": f"product-{i}",
                "code": f"PROD{i:04d}",
                "name": f"Product {i}",
                "status": "active",
                "warehouses": [{"warehouse_id": warehouse_id, "stock": int(rng.integers(0, 50))}],
                # ~5% of products without an approved expedition
                "expeditions": []
                if rng.random() < 0.05
                else [
                    {
                        "id": f"exp-{i}",
                        "expedition_code": f"EXP{i:04d}",
                        "status": "approved",
                        "unit_price": float(np.round(rng.uniform(1, 200), 2)),
                    }
                ],
            }
        )
    return {"products": entries}


def generate_orders(rows: int, products: int, error_rate: float = 0.1, seed: int = 42) -> pd.DataFrame:
    """Order rows in import layout; roughly ``error_rate`` of them are invalid."""
    rng = np.random.default_rng(seed)
    records: list[list[str]] = []
    for r in range(1, rows + 1):
        n_items = int(rng.integers(1, 4))
        codes = [f"PROD{int(rng.integers(1, products + 1)):04d}" for _ in range(n_items)]
        names = [f"Product {int(c[4:])}" for c in codes]
        prices = [f"{rng.uniform(1, 200):.2f}" for _ in range(n_items)]
        qtys = [str(int(rng.integers(1, 10))) for _ in range(n_items)]

        if rng.random() < error_rate:
            kind = int(rng.integers(0, 3))
            if kind == 0:
                codes[0] = "UNKNOWN"
            elif kind == 1:
                prices[0] = "abc"
            else:
                qtys = qtys[:-1] or ["1", "1"]

        records.append(
            [
                f"ORD{r:06d}",
                "|".join(codes),
                pd.Timestamp("2024-01-01").date().isoformat(),
                "|".join(names),
                "",
                f"Customer {r}",
                f"+1{int(rng.integers(10**9, 10**10 - 1))}",
                f"{r} Main St, City",
                "|".join(prices),
                "|".join(qtys),
                "Sample Store",
            ]
        )
    return pd.DataFrame(records, columns=list(EXPECTED_COLUMNS))


def write_orders(df: pd.DataFrame, output: Path) -> None:
    output.parent.mkdir(parents=True, exist_ok=True)
    if output.suffix.lower() == ".xlsx":
        with pd.ExcelWriter(output, engine="openpyxl") as writer:
            df.to_excel(writer, sheet_name="Orders", index=False)
        return
    output.write_bytes(render_csv([list(df.columns), *df.itertuples(index=False)]))


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Generate a synthetic order import file and catalog snapshot",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s data/orders.csv
  %(prog)s data/orders.xlsx --rows 20000 --products 500 --error-rate 0.2
        """,
    )
    parser.add_argument("output", type=Path, help="Output order file (.csv or .xlsx)")
    parser.add_argument("--catalog", type=Path, default=Path("config/catalog.yml"), help="Catalog YAML output path")
    parser.add_argument("--warehouse", default="warehouse-1", help="Warehouse id (default: warehouse-1)")
    parser.add_argument("--rows", type=int, default=1_000, help="Number of order rows (default: 1,000)")
    parser.add_argument("--products", type=int, default=100, help="Catalog size (default: 100)")
    parser.add_argument("--error-rate", type=float, default=0.1, help="Share of invalid rows (default: 0.1)")
    parser.add_argument("--seed", type=int, default=42, help="Random seed (default: 42)")
    args = parser.parse_args()

    if args.rows <= 0 or args.products <= 0:
        print("Error: --rows and --products must be positive", file=sys.stderr)
        return 1
    if not 0 <= args.error_rate <= 1:
        print("Error: --error-rate must be between 0 and 1", file=sys.stderr)
        return 1

    catalog = generate_catalog(args.products, args.warehouse, args.seed)
    args.catalog.parent.mkdir(parents=True, exist_ok=True)
    args.catalog.write_text(yaml.safe_dump(catalog, sort_keys=False), encoding="utf-8")

    df = generate_orders(args.rows, args.products, args.error_rate, args.seed)
    write_orders(df, args.output)

    print(f"Created order file: {args.output} ({args.rows:,} rows)")
    print(f"Created catalog: {args.catalog} ({args.products:,} products, warehouse={args.warehouse})")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

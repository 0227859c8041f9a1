"""
Synthetic dataset generator for the Sales Query engine.

Implements deterministic pseudo-random transaction generation and writes either
CSV (spaced headers, as in the retail spreadsheet export) or JSON
(camelCase keys, a plain list of records).
"""

from __future__ import annotations

import csv
import json
import random
import sys
import time
from datetime import date, timedelta
from pathlib import Path
from typing import Any, Dict, Iterator, List

import typer

app = typer.Typer(help="Generate a synthetic retail transaction dataset (CSV or JSON).")

FIRST_NAMES = ["Aarav", "Ananya", "Chloé", "Diego", "Emma", "Farah", "Ivan", "Mei", "Neha", "Zoë"]
LAST_NAMES = ["Sharma", "García", "Müller", "Nguyen", "Okafor", "Patel", "Rossi", "Smith"]
REGIONS = ["Central", "East", "North", "South", "West"]
GENDERS = ["Female", "Male"]
CUSTOMER_TYPES = ["Loyal", "New", "Returning"]
PAYMENT_METHODS = ["Cash", "Credit Card", "Debit Card", "Net Banking", "UPI", "Wallet"]
ORDER_STATUSES = ["Cancelled", "Completed", "Pending", "Returned"]
DELIVERY_TYPES = ["Express", "Standard", "Store Pickup"]
CATALOG = {
    "Beauty": ["Face Serum", "Lipstick", "Sunscreen"],
    "Clothing": ["Denim Jacket", "Running Shoes", "T-Shirt"],
    "Electronics": ["Headphones", "Smartwatch", "Tablet"],
    "Home": ["Blender", "Desk Lamp", "Pillow Set"],
}
BRANDS = ["Acme", "Northwind", "Umbra", "Zenith"]
TAGS = ["accessories", "casual", "eco-friendly", "fashion", "gadgets", "organic", "premium", "wireless"]
STORES = {"ST001": "Mumbai", "ST002": "Delhi", "ST003": "Bengaluru", "ST004": "Chennai"}
EMPLOYEES = {"SP01": "Harsh Agarwal", "SP02": "Kavya Reddy", "SP03": "Rohan Mehta"}

START_DATE = date(2021, 1, 1)
DATE_SPAN_DAYS = 3 * 365

CSV_COLUMNS = [
    ("Transaction ID", "transactionId"),
    ("Date", "date"),
    ("Customer ID", "customerId"),
    ("Customer Name", "customerName"),
    ("Phone Number", "phoneNumber"),
    ("Gender", "gender"),
    ("Age", "age"),
    ("Customer Region", "customerRegion"),
    ("Customer Type", "customerType"),
    ("Product ID", "productId"),
    ("Product Name", "productName"),
    ("Brand", "brand"),
    ("Product Category", "productCategory"),
    ("Tags", "tags"),
    ("Quantity", "quantity"),
    ("Price per Unit", "pricePerUnit"),
    ("Discount Percentage", "discountPercentage"),
    ("Total Amount", "totalAmount"),
    ("Final Amount", "finalAmount"),
    ("Payment Method", "paymentMethod"),
    ("Order Status", "orderStatus"),
    ("Delivery Type", "deliveryType"),
    ("Store ID", "storeId"),
    ("Store Location", "storeLocation"),
    ("Salesperson ID", "salespersonId"),
    ("Employee Name", "employeeName"),
]


def generate_transactions(rows: int, seed: int) -> Iterator[Dict[str, Any]]:
    """Yield `rows` transactions with camelCase keys; same seed, same data."""
    rng = random.Random(seed)
    customers = max(1, rows // 4)

    for i in range(1, rows + 1):
        customer_num = rng.randint(1, customers)
        category = rng.choice(sorted(CATALOG))
        product = rng.choice(CATALOG[category])
        quantity = rng.randint(1, 10)
        price = round(rng.uniform(50, 5_000), 2)
        discount = rng.choice([0, 0, 5, 10, 15, 20, 25])
        total = round(quantity * price, 2)
        final = round(total * (100 - discount) / 100, 2)
        store_id = rng.choice(sorted(STORES))
        salesperson_id = rng.choice(sorted(EMPLOYEES))

        yield {
            "transactionId": str(i),
            "date": (START_DATE + timedelta(days=rng.randint(0, DATE_SPAN_DAYS))).isoformat(),
            "customerId": f"CUST-{customer_num:05d}",
            "customerName": f"{rng.choice(FIRST_NAMES)} {rng.choice(LAST_NAMES)}",
            "phoneNumber": f"+91 {rng.randint(70000, 99999)}{rng.randint(10000, 99999)}",
            "gender": rng.choice(GENDERS),
            "age": rng.randint(18, 70),
            "customerRegion": rng.choice(REGIONS),
            "customerType": rng.choice(CUSTOMER_TYPES),
            "productId": f"PROD-{rng.randint(1, 500):04d}",
            "productName": product,
            "brand": rng.choice(BRANDS),
            "productCategory": category,
            "tags": sorted(rng.sample(TAGS, rng.randint(0, 3))),
            "quantity": quantity,
            "pricePerUnit": price,
            "discountPercentage": discount,
            "totalAmount": total,
            "finalAmount": final,
            "paymentMethod": rng.choice(PAYMENT_METHODS),
            "orderStatus": rng.choice(ORDER_STATUSES),
            "deliveryType": rng.choice(DELIVERY_TYPES),
            "storeId": store_id,
            "storeLocation": STORES[store_id],
            "salespersonId": salesperson_id,
            "employeeName": EMPLOYEES[salesperson_id],
        }


def _csv_cell(value: Any) -> Any:
    if isinstance(value, list):
        return ",".join(value)
    return value


def _generate_rows_csv(csv_path: Path, rows: int, batch_size: int, seed: int) -> None:
    with csv_path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow([header for header, _ in CSV_COLUMNS])

        buffer: List[List[Any]] = []
        for transaction in generate_transactions(rows, seed):
            buffer.append([_csv_cell(transaction[key]) for _, key in CSV_COLUMNS])
            if len(buffer) >= batch_size:
                writer.writerows(buffer)
                buffer.clear()
        if buffer:
            writer.writerows(buffer)


def _generate_rows_json(json_path: Path, rows: int, seed: int) -> None:
    with json_path.open("w", encoding="utf-8") as f:
        json.dump(list(generate_transactions(rows, seed)), f, ensure_ascii=False, indent=1)


@app.command()
def main(
    output: Path = typer.Option(
        Path("data/sales.csv"),
        "--output",
        "-o",
        help="Output path; the suffix (.csv or .json) selects the format.",
    ),
    rows: int = typer.Option(
        10_000,
        "--rows",
        "-r",
        help="Number of transactions to generate.",
    ),
    batch_size: int = typer.Option(
        5_000,
        "--batch-size",
        "-b",
        help="Batch size for CSV buffering during generation.",
    ),
    seed: int = typer.Option(
        42,
        "--seed",
        help="Deterministic RNG seed.",
    ),
) -> None:
    """
    Generate a synthetic transaction dataset.
    """
    suffix = output.suffix.lower()
    if suffix not in (".csv", ".json"):
        typer.echo(f"Unsupported output format '{suffix}'. Use .csv or .json.", err=True)
        raise typer.Exit(code=1)

    start = time.perf_counter()
    output.parent.mkdir(parents=True, exist_ok=True)
    typer.echo(f"Generating {rows:,} transactions -> {output} (seed={seed})")
    if suffix == ".csv":
        _generate_rows_csv(output, rows=rows, batch_size=max(1, batch_size), seed=seed)
    else:
        _generate_rows_json(output, rows=rows, seed=seed)

    duration = time.perf_counter() - start
    typer.echo(
        f"Generation completed in {duration:.2f}s ({rows / duration if duration else 0:,.0f} rows/s)"
    )


if __name__ == "__main__":
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)

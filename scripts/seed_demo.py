#!/usr/bin/env python3
"""Write a demo immunization record file with a realistic mix of gaps.

Usage:
    python scripts/seed_demo.py                     # writes immunization_data.json
    python scripts/seed_demo.py out.json --count 200 --days 45
"""
from __future__ import annotations

import argparse
import json
import random
from datetime import date, timedelta
from pathlib import Path

VACCINES = [
    ("DTaP", "49281-0286-10", "0.5", "mL"),
    ("MMR", "00006-4681-00", "0.5", "mL"),
    ("Influenza", "49281-0421-50", "0.5", "mL"),
    ("HepB", "58160-0820-11", "1", "mL"),
    ("Varicella", "00006-4827-00", "0.5", "mL"),
]
VFC_CODES = ["V01", "V02", "V03", "V04", "V05"]
FUNDING_CODES = ["VXC50", "VXC51", "VXC52", "PHC70"]
RACES = ["2106-3", "2054-5", "2028-9", "1002-5"]
ETHNICITIES = ["2135-2", "2186-5"]


def _maybe(rng: random.Random, value: str, missing_rate: float) -> str:
    return "" if rng.random() < missing_rate else value


def build_record(rng: random.Random, index: int, today: date, days: int) -> dict:
    vaccine, ndc, quantity, units = rng.choice(VACCINES)
    administered = today - timedelta(days=rng.randint(0, days))
    expires = administered + timedelta(days=rng.randint(-30, 540))
    age = rng.randint(0, 80)
    return {
        "doc_id": f"DOC-{index:05d}",
        "patient_id": f"PAT-{rng.randint(1, 9999):04d}",
        "status": rng.choice(["completed", "completed", "entered-in-error"]),
        "age": age,
        "race": _maybe(rng, rng.choice(RACES), 0.15),
        "ethnicity": _maybe(rng, rng.choice(ETHNICITIES), 0.15),
        "mobile": _maybe(rng, f"555-{rng.randint(0, 9999):04d}", 0.2),
        "email": _maybe(rng, f"patient{index}@example.com", 0.3),
        "administered_date": administered.isoformat(),
        "vaccine_name": vaccine,
        "vfc_status": _maybe(rng, rng.choice(VFC_CODES), 0.2) if age < 19 else "",
        "funding_source": _maybe(rng, rng.choice(FUNDING_CODES), 0.2),
        "quantity": quantity,
        "units": units,
        "ndc": _maybe(rng, ndc, 0.1),
        "lot_number": _maybe(rng, f"L{rng.randint(1000, 9999)}", 0.1),
        "expiration_date": _maybe(rng, expires.isoformat(), 0.1),
    }


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("output", nargs="?", default="immunization_data.json")
    parser.add_argument("--count", type=int, default=100)
    parser.add_argument("--days", type=int, default=30)
    parser.add_argument("--seed", type=int, default=7)
    args = parser.parse_args()

    rng = random.Random(args.seed)
    today = date.today()
    records = [build_record(rng, i, today, args.days) for i in range(1, args.count + 1)]
    Path(args.output).write_text(json.dumps(records, indent=2), encoding="utf-8")
    print(f"Wrote {len(records)} records to {args.output}")


if __name__ == "__main__":
    main()

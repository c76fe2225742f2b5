#!/usr/bin/env python3
from __future__ import annotations

import argparse
import json

import requests


def main() -> None:
    parser = argparse.ArgumentParser(description="Seed the print shop demo data and show the finance summary")
    parser.add_argument("--base-url", default="http://localhost:8000")
    args = parser.parse_args()

    resp = requests.post(f"{args.base_url}/demo/seed", timeout=60)
    resp.raise_for_status()
    seeded = resp.json()

    summary = requests.get(f"{args.base_url}/finance/summary", timeout=60)
    summary.raise_for_status()
    print(json.dumps({"seed": seeded, "finance_summary": summary.json()}, indent=2, ensure_ascii=False))


if __name__ == "__main__":
    main()

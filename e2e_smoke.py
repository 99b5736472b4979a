#!/usr/bin/env python3
"""
Juice Inventory - E2E smoke tests against a running deployment

Run:
  python e2e_smoke.py

Expects a freshly bootstrapped store seeded from the bundled juice list.

Optional env:
  INVENTORY_BASE=http://localhost:8090
  SEED_FILE=juice_inventory/app/data/juices.txt
  DELETE_ID=42
  DEBUG=1
"""

from __future__ import annotations

import os
import sys
import time
from dataclasses import dataclass
from datetime import date, timedelta
from pathlib import Path
from typing import Any, Dict, List

import requests


# =========================
# Simple CLI UI (ANSI)
# =========================

class Style:
    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"

    RED = "\033[91m"
    GREEN = "\033[92m"
    CYAN = "\033[96m"
    BLUE = "\033[94m"
    GRAY = "\033[90m"


def section_title(text: str):
    print(f"\n{Style.BLUE}{Style.BOLD}== {text} =={Style.RESET}")


def info(msg: str):
    print(f"{Style.CYAN}ℹ {msg}{Style.RESET}")


def ok(msg: str):
    print(f"{Style.GREEN}✔ {msg}{Style.RESET}")


def fail(msg: str):
    print(f"{Style.RED}✘ {msg}{Style.RESET}")


# =========================
# Config
# =========================

INVENTORY_BASE = os.getenv("INVENTORY_BASE", "http://localhost:8090")
SEED_FILE = Path(os.getenv("SEED_FILE", "juice_inventory/app/data/juices.txt"))
DELETE_ID = os.getenv("DELETE_ID", "42")
DEBUG = os.getenv("DEBUG", "0").strip() in {"1", "true", "True", "YES", "yes"}

# One Julian year, plus a day of slack for clock skew between hosts.
MAX_SHELF_LIFE = timedelta(seconds=31_557_600) + timedelta(days=1)


def debug(msg: str):
    if DEBUG:
        print(f"{Style.GRAY}… {msg}{Style.RESET}")


@dataclass
class TestResult:
    name: str
    success: bool
    details: str = ""


# =========================
# HTTP helpers
# =========================

def http(method: str, url: str, **kwargs) -> requests.Response:
    kwargs.setdefault("timeout", 8)
    debug(f"{method} {url}")
    return requests.request(method, url, **kwargs)


def wait_for_health(base_url: str, timeout: int = 30) -> bool:
    start = time.time()
    while time.time() - start < timeout:
        try:
            if http("GET", f"{base_url}/health").status_code == 200:
                ok("inventory service is healthy.")
                return True
        except requests.exceptions.RequestException as e:
            debug(f"not ready: {e}")
        time.sleep(1)
    fail(f"inventory service did not become healthy in {timeout} seconds.")
    return False


def list_products() -> List[Dict[str, Any]]:
    resp = http("GET", f"{INVENTORY_BASE}/products")
    if resp.status_code != 200:
        raise AssertionError(f"GET /products: expected HTTP 200, got {resp.status_code}, body={resp.text}")
    return resp.json()


def seed_names() -> List[str]:
    with open(SEED_FILE, encoding="utf-8") as handle:
        return [line.strip() for line in handle if line.strip()]


# =========================
# Scenarios
# =========================

def scenario_listing() -> TestResult:
    section_title("Seeded Listing")
    try:
        expected_names = set(seed_names())
        items = list_products()
        info(f"GET /products returned {len(items)} rows")

        problems = []
        if not 0 < len(items) <= 200:
            problems.append(f"row count {len(items)} outside 1..200")
        if len({item.get("id") for item in items}) != len(items):
            problems.append("ids are not unique")

        today = date.today()
        for item in items:
            if item.get("name") not in expected_names:
                problems.append(f"unexpected name {item.get('name')!r}")
            expiration = date.fromisoformat(str(item.get("expiration"))[:10])
            if not today - timedelta(days=1) <= expiration <= today + MAX_SHELF_LIFE:
                problems.append(f"expiration {expiration} out of range for id={item.get('id')}")

        success = not problems
        msg = "all rows valid" if success else "; ".join(problems[:5])
        (ok if success else fail)(msg)
        return TestResult("Seeded Listing", success, msg)
    except Exception as e:
        fail(f"Exception while listing products: {e}")
        return TestResult("Seeded Listing", False, str(e))


def scenario_delete_acknowledgment() -> TestResult:
    section_title("Delete Acknowledgment")
    try:
        before = len(list_products())
        resp = http("DELETE", f"{INVENTORY_BASE}/products/{DELETE_ID}")
        after = len(list_products())

        success = resp.status_code == 200 and DELETE_ID in resp.text and before == after
        msg = f"HTTP {resp.status_code} body={resp.text.strip()!r}, rows {before} -> {after}"
        (ok if success else fail)(msg)
        return TestResult("Delete Acknowledgment", success, msg)
    except Exception as e:
        fail(f"Exception while deleting product: {e}")
        return TestResult("Delete Acknowledgment", False, str(e))


def print_results(results: List[TestResult]) -> int:
    print(f"\n{Style.BOLD}================ TEST RESULTS ================{Style.RESET}")
    failed = 0
    for r in results:
        color = Style.GREEN if r.success else Style.RED
        print(f"{color}{'✅' if r.success else '❌'} {r.name}{Style.RESET}")
        if r.details:
            print(f"    {Style.DIM}{r.details}{Style.RESET}")
        failed += 0 if r.success else 1
    print(f"Total tests: {len(results)}  |  Failed: {failed}")
    return failed


def main():
    info(f"Waiting for {INVENTORY_BASE} to become healthy...")
    if not wait_for_health(INVENTORY_BASE):
        sys.exit(1)

    results = [scenario_listing(), scenario_delete_acknowledgment()]
    sys.exit(1 if print_results(results) else 0)


if __name__ == "__main__":
    main()

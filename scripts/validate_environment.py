#!/usr/bin/env python3
"""Validate local reservation environment readiness."""

from __future__ import annotations

import importlib
import sys
import time
from dataclasses import replace
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from backend.domain.floor_plan import TOTAL_ROOMS
from backend.repository.inventory_repository import InventoryRepository
from backend.services.booking_service import BookingService
from backend.utils.config import get_settings

SEPARATOR_LINE = "=" * 44


def _print_result(name: str, success: bool, detail: str = "") -> tuple[bool, str]:
    if success:
        return True, f"[PASS] {name}{detail}"
    return False, f"[FAIL] {name}: {detail}"


def main() -> int:
    results: list[str] = []
    all_passed = True

    # CHECK 1: Python version >= 3.10
    if sys.version_info >= (3, 10):
        ok, line = _print_result("Python " + sys.version.split()[0], True)
    else:
        ok, line = _print_result(
            "Python version >= 3.10",
            False,
            f"found {sys.version.split()[0]}",
        )
    results.append(line)
    all_passed = all_passed and ok

    # CHECK 2: Required packages importable
    package_specs = [
        "fastapi",
        "uvicorn",
        "pydantic",
        "pandas",
        "requests",
        "streamlit",
        "httpx",
        "pytest",
    ]
    import_errors: list[str] = []
    for module_name in package_specs:
        try:
            importlib.import_module(module_name)
        except ImportError as exc:
            import_errors.append(f"{module_name} ({exc})")
    if import_errors:
        ok, line = _print_result(
            "Required packages",
            False,
            "missing/unimportable -> " + "; ".join(import_errors),
        )
    else:
        ok, line = _print_result("Required packages: all importable", True)
    results.append(line)
    all_passed = all_passed and ok

    settings = replace(get_settings(), random_occupancy_seed=7)
    repository = InventoryRepository(settings)

    # CHECK 3: Inventory construction
    room_count = len(repository.list_all())
    ok, line = _print_result(
        f"Inventory: {room_count} rooms",
        room_count == TOTAL_ROOMS,
        f"expected {TOTAL_ROOMS}" if room_count != TOTAL_ROOMS else "",
    )
    results.append(line)
    all_passed = all_passed and ok

    # CHECK 4: Worst-case booking latency on a randomized inventory
    service = BookingService(repository=repository, settings=settings)
    try:
        service.randomize(0.6)
        started = time.perf_counter()
        confirmation = service.book(5)
        elapsed = time.perf_counter() - started
        ok, line = _print_result(
            "Sample booking",
            True,
            (
                f": rooms={confirmation.assignment.room_numbers} "
                f"cost={confirmation.assignment.total_travel_cost} "
                f"elapsed={elapsed:.3f}s"
            ),
        )
    except Exception as exc:
        ok, line = _print_result("Sample booking", False, str(exc))
    results.append(line)
    all_passed = all_passed and ok

    print(SEPARATOR_LINE)
    print(" Reservation Environment Validation")
    print(SEPARATOR_LINE)
    for line in results:
        print(f" {line}")
    print(SEPARATOR_LINE)
    if all_passed:
        print(" All checks passed. Environment is ready.")
        print(SEPARATOR_LINE)
        return 0
    print(" One or more checks failed.")
    print(SEPARATOR_LINE)
    return 1


if __name__ == "__main__":
    raise SystemExit(main())

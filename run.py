#!/usr/bin/env python3

"""
Regression and integration test runner for the Trendline API.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

import asyncio
import math
import os
import sys
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any, Dict, List

import httpx

BASE_URL = os.getenv("TRENDLINE_BASE_URL", "http://localhost:4330/api/v1")
HEADERS = {"Content-Type": "application/json"}

START = datetime(2026, 1, 5)
END = START + timedelta(days=13, hours=23)


def _series(label: str, unit: str, phase: float = 0.0, scale: float = 1.0, step_hours: int = 3) -> Dict[str, Any]:
    samples: List[Dict[str, Any]] = []
    ts = START
    i = 0
    while ts <= END:
        value = scale * (50 + 20 * math.sin(i / 4 + phase))
        samples.append({"timestamp": ts.isoformat(), "value": round(value, 3)})
        ts += timedelta(hours=step_hours)
        i += 1
    return {"label": label, "unit": unit, "samples": samples}


CPU = _series("cpu", "%")
MEM = _series("memory", "MB", phase=1.0, scale=8.0)
REQ = _series("requests", "req/s", phase=2.0, scale=3.0, step_hours=2)


@dataclass(frozen=True)
class Case:
    label: str
    method: str
    path: str
    body: Dict[str, Any] = field(default_factory=dict)
    params: Dict[str, Any] = field(default_factory=dict)
    expect: int = 200
    section: str = ""


def base(extra: Dict[str, Any] | None = None) -> Dict[str, Any]:
    d: Dict[str, Any] = {"start": START.isoformat(), "end": END.isoformat()}
    if extra:
        d.update(extra)
    return d


CASES: list[Case] = [
    # ── Health ────────────────────────────────────────────
    Case("health", "GET", "/health", section="Health"),
    Case("ready", "GET", "/ready", section="Health"),

    # ── Charts ────────────────────────────────────────────
    Case("single (auto)", "POST", "/charts/compute", section="Charts",
         body=base({"series": [CPU]})),
    Case("combined (auto)", "POST", "/charts/compute", section="Charts",
         body=base({"series": [CPU, MEM]})),
    Case("multi (auto)", "POST", "/charts/compute", section="Charts",
         body=base({"series": [CPU, MEM, REQ]})),
    Case("difference", "POST", "/charts/compute", section="Charts",
         body=base({"strategy": "difference", "series": [CPU, MEM]})),
    Case("ratio", "POST", "/charts/compute", section="Charts",
         body=base({"strategy": "ratio", "series": [MEM, CPU]})),
    Case("normalized zero_to_one", "POST", "/charts/compute", section="Charts",
         body=base({"strategy": "normalized", "series": [CPU, REQ], "normalization_mode": "zero_to_one"})),
    Case("normalized relative_to_max", "POST", "/charts/compute", section="Charts",
         body=base({"strategy": "normalized", "series": [CPU, REQ], "normalization_mode": "relative_to_max"})),
    Case("weekday trend", "POST", "/charts/weekday-trend", section="Charts",
         body=base({"series": CPU})),
    Case("inverted range", "POST", "/charts/compute", section="Charts",
         body={"start": END.isoformat(), "end": START.isoformat(), "series": [CPU]}),

    # ── Distributions ─────────────────────────────────────
    Case("weekly adaptive", "POST", "/distributions/weekly", section="Distributions",
         body=base({"series": CPU})),
    Case("hourly 12 intervals", "POST", "/distributions/hourly", section="Distributions",
         body=base({"series": REQ, "interval_count": 12})),

    # ── Transforms ────────────────────────────────────────
    Case("operations", "GET", "/transforms/operations", section="Transforms"),
    Case("log", "POST", "/transforms", section="Transforms",
         body=base({"operation": "log", "series": [CPU]})),
    Case("divide", "POST", "/transforms", section="Transforms",
         body=base({"operation": "divide", "series": [MEM, CPU]})),
    Case("unknown operation", "POST", "/transforms", section="Transforms",
         body=base({"operation": "cube", "series": [CPU]}), expect=404),
    Case("arity mismatch", "POST", "/transforms", section="Transforms",
         body=base({"operation": "add", "series": [CPU]}), expect=400),

    # ── Validation ────────────────────────────────────────
    Case("missing series", "POST", "/charts/compute", section="Validation",
         body=base({"series": []}), expect=422),
    Case("interval count out of range", "POST", "/distributions/weekly", section="Validation",
         body=base({"series": CPU, "interval_count": 99}), expect=422),
    Case("distribution via chart route", "POST", "/charts/compute", section="Validation",
         body=base({"strategy": "weekly_distribution", "series": [CPU]}), expect=400),
]


async def run_case(client: httpx.AsyncClient, case: Case) -> tuple[bool, str, Any]:
    attempt = 0
    last_exc: Exception | None = None
    while attempt < 2:
        try:
            if case.method == "GET":
                r = await client.get(case.path, params=case.params)
            else:
                r = await client.request(case.method, case.path, json=case.body or None,
                                         params=case.params)
            ok = r.status_code == case.expect
            body: Any = None
            try:
                body = r.json()
            except Exception:
                body = r.text
            if ok:
                return True, "", body
            return False, f"{r.status_code} {r.reason_phrase}: {body}", body
        except httpx.TransportError as exc:
            last_exc = exc
            attempt += 1
            if attempt < 2:
                await asyncio.sleep(0.1)
                continue
            return False, f"transport error: {exc}", None
        except Exception as e:
            return False, str(e), None
    return False, str(last_exc), None


def _summary(body: Any) -> str:
    if isinstance(body, dict) and isinstance(body.get("result"), dict):
        result = body["result"]
        if "timestamps" in result:
            return f"{len(result['timestamps'])} points, tick={result.get('tick_interval')}, unit={result.get('unit')}"
        if "bins" in result:
            return f"{len(result['bins'])} bins, counts={result.get('counts')}"
    if isinstance(body, dict) and body.get("result") is None and "result" in body:
        return "no result"
    if isinstance(body, list):
        return f"{len(body)} items"
    return str(body)[:200]


async def main():
    import argparse

    parser = argparse.ArgumentParser(description="Run API test cases")
    parser.add_argument("--section", help="only run cases from this section name")
    parser.add_argument("--label", help="only run the case with this exact label")
    args = parser.parse_args()
    selected: list[Case] = []
    for c in CASES:
        if args.section and c.section != args.section:
            continue
        if args.label and c.label != args.label:
            continue
        selected.append(c)
    if not selected:
        print("no matching cases (check --section or --label)")
        sys.exit(1)

    passed = failed = 0
    current_section = ""

    async with httpx.AsyncClient(base_url=BASE_URL, headers=HEADERS, timeout=30) as client:
        for case in selected:
            if case.section != current_section:
                current_section = case.section
                print(f"\n── {current_section} {'─' * max(0, 44 - len(current_section))}")

            ok, detail, body = await run_case(client, case)
            if ok:
                passed += 1
                print(f"  ✓ PASS  {case.method} {case.path} ({case.label}): {_summary(body)}")
            else:
                failed += 1
                print(f"  ✗ FAIL  {case.method} {case.path} ({case.label}), expected {case.expect}")
                if detail:
                    print(f"         {detail}")

    total = passed + failed
    print(f"\n{'━' * 43}")
    print(f"  Results: {passed} passed / {failed} failed / {total} total")
    print(f"  {'All tests passed ✓' if failed == 0 else f'{failed} test(s) failed ✗'}")
    print(f"{'━' * 43}\n")
    sys.exit(0 if failed == 0 else 1)


if __name__ == "__main__":
    asyncio.run(main())

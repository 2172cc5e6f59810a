"""Metrics instrumentation."""

from __future__ import annotations

from prometheus_client import Counter

commands_total = Counter(
    "storefront_commands_total",
    "Commands replayed against the store",
    ["kind", "outcome"],
)

records_rejected_total = Counter(
    "storefront_records_rejected_total",
    "Input records skipped by validation",
    ["stream"],
)


def inc_command(kind: str, ok: bool) -> None:
    commands_total.labels(kind=kind, outcome="ok" if ok else "failed").inc()


def inc_rejected(stream: str, n: int = 1) -> None:
    records_rejected_total.labels(stream=stream).inc(n)

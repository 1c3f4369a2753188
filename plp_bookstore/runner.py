# runner.py — connect once, run the steps in order, stop at the first failure,
# always close the client.

import json
from pathlib import Path
from typing import Any, Dict, List, Optional

from pymongo import MongoClient
from pymongo.results import DeleteResult, InsertOneResult, UpdateResult

from .steps import STEPS


class StepResult:
    """Outcome of one step: either a value or the error that stopped the run."""

    def __init__(self, key: str, name: str, ok: bool, value: Any = None,
                 error: Optional[BaseException] = None):
        self.key = key
        self.name = name
        self.ok = ok
        self.value = value
        self.error = error

    def __repr__(self):
        status = "ok" if self.ok else f"failed: {self.error}"
        return f"StepResult({self.key} {self.name} {status})"


def execute_step(col, step) -> StepResult:
    try:
        value = step.run(col)
    except Exception as e:
        return StepResult(step.key, step.name, False, error=e)
    return StepResult(step.key, step.name, True, value=value)


def run_steps(col, steps=STEPS, show=True) -> List[StepResult]:
    """Run steps in order; the first failed step ends the run."""
    results: List[StepResult] = []
    section = None
    for step in steps:
        if show and step.section != section:
            section = step.section
            print(f"\n===== {section} =====")
        res = execute_step(col, step)
        results.append(res)
        if not res.ok:
            return results
        if show:
            step.show(res.value)
    return results


def connect(config, client_factory=MongoClient):
    """Build the client and ping it. Returns (client or None, StepResult)."""
    client = None
    try:
        # InvalidURI and ConfigurationError are raised here, before any network call
        client = client_factory(config.mongo_uri, serverSelectionTimeoutMS=config.timeout_ms)
        # MongoClient connects lazily; ping forces server selection
        client.admin.command("ping")
    except Exception as e:
        return client, StepResult("0", "connect", False, error=e)
    return client, StepResult("0", "connect", True)


def run_queries(config, steps=STEPS, client_factory=MongoClient, show=True) -> List[StepResult]:
    client, res = connect(config, client_factory)
    try:
        if not res.ok:
            return [res]
        print(f"[connect] Connected to MongoDB ({config.db_name}.{config.collection_name})")
        col = client[config.db_name][config.collection_name]
        return [res] + run_steps(col, steps, show=show)
    finally:
        if client is not None:
            client.close()
            print("\nConnection closed")


def report(results: List[StepResult], planned: int) -> int:
    """Print the run summary; returns the process exit code."""
    failed = [r for r in results if not r.ok]
    for r in failed:
        print(f"[error] {r.key} {r.name}: {r.error}")
    done = sum(1 for r in results if r.ok and r.name != "connect")
    print(f"[done] {done}/{planned} steps completed")
    if failed:
        print("NOTE: the run stopped at the first failed step; later steps were not attempted.")
        return 1
    return 0


# =========================
# Export
# =========================

def _plain(value):
    if isinstance(value, InsertOneResult):
        return {"inserted_id": value.inserted_id, "acknowledged": value.acknowledged}
    if isinstance(value, UpdateResult):
        return {"matched_count": value.matched_count, "modified_count": value.modified_count}
    if isinstance(value, DeleteResult):
        return {"deleted_count": value.deleted_count}
    if isinstance(value, list):
        return [_plain(v) for v in value]
    if isinstance(value, dict):
        return {k: _plain(v) for k, v in value.items()}
    return value


def results_to_records(results: List[StepResult]) -> List[Dict[str, Any]]:
    return [
        {
            "key": r.key,
            "name": r.name,
            "ok": r.ok,
            "value": _plain(r.value),
            "error": str(r.error) if r.error is not None else None,
        }
        for r in results
    ]


def save_json(results: List[StepResult], path) -> Path:
    out_path = Path(path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    with out_path.open("w", encoding="utf-8") as f:
        # ObjectId and other BSON types go through str
        json.dump(results_to_records(results), f, indent=2, default=str)
    print(f"[export] Saved {len(results)} step results → {out_path}")
    return out_path

"""Run the law catalog through `for_all` and summarize what each run measured.

A `LawResult` records the seed a law was checked with, how many trials ran
before it was falsified (or `goal` when it held), and the shrunk inputs
that falsified it. Exceptions raised while checking a law propagate: a
missing implementation is a broken environment, not a falsified law.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import asdict, dataclass
import logging
from typing import Any

from .environment import Environment
from .laws import Law, default_laws

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LawResult:
    law: str
    structure: str
    seed: int
    goal: int
    trials: int
    counterexample: str | None = None

    @property
    def holds(self) -> bool:
        return self.counterexample is None


@dataclass(frozen=True)
class ConformanceSummary:
    laws: int
    held: int
    trials: int

    @property
    def falsified(self) -> int:
        return self.laws - self.held

    @property
    def status(self) -> str:
        if self.laws == 0:
            return "empty"
        return "fail" if self.falsified else "pass"

    def to_dict(self) -> dict[str, Any]:
        return {**asdict(self), "falsified": self.falsified, "status": self.status}


def run_law(env: Environment, law: Law, *, seed: int | None = None) -> LawResult:
    """Checks one law. A fresh seed is drawn when none is given, so every result can be replayed."""
    from .rng import fresh_seed

    if seed is None:
        seed = fresh_seed()
    goal = env.goal
    report = env.for_all(law.property_for(env), list(law.shapes), seed=seed)
    # `tries` counts the passing trials; the falsifying one ran too.
    trials = report.fold(lambda fail: fail.tries + 1, goal)
    counterexample = report.fold(lambda fail: repr(fail.inputs), None)
    if counterexample is None:
        logger.debug("law %s held for %d trials (seed=%d)", law.id, trials, seed)
    else:
        logger.info("law %s falsified on trial %d (seed=%d): %s", law.id, trials, seed, counterexample)
    return LawResult(law.id, law.structure, seed, goal, trials, counterexample)


def run_laws(env: Environment, laws: Iterable[Law] | None = None, *, seed: int | None = None) -> list[LawResult]:
    return [run_law(env, law, seed=seed) for law in (default_laws() if laws is None else laws)]


def summarize(results: Iterable[LawResult]) -> ConformanceSummary:
    results = list(results)
    return ConformanceSummary(
        laws=len(results),
        held=sum(1 for r in results if r.holds),
        trials=sum(r.trials for r in results),
    )


def by_structure(results: Iterable[LawResult]) -> dict[str, ConformanceSummary]:
    grouped: dict[str, list[LawResult]] = {}
    for result in results:
        grouped.setdefault(result.structure, []).append(result)
    return {structure: summarize(rows) for structure, rows in grouped.items()}


def results_to_markdown(results: Iterable[LawResult]) -> str:
    lines = [
        "| Law | Structure | Seed | Trials | Result | Counterexample |",
        "|---|---|---:|---:|---|---|",
    ]
    for r in results:
        outcome = "holds" if r.holds else "falsified"
        shown = "" if r.holds else f"`{r.counterexample}`"
        lines.append(f"| `{r.law}` | {r.structure} | {r.seed} | {r.trials}/{r.goal} | {outcome} | {shown} |")
    return "\n".join(lines)


def report_payload(results: Iterable[LawResult], *, seed: int | None = None) -> dict[str, Any]:
    results = list(results)
    return {
        "seed": seed,
        "laws": [asdict(r) for r in results],
        "structures": {name: summary.to_dict() for name, summary in by_structure(results).items()},
        "summary": summarize(results).to_dict(),
    }

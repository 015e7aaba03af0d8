"""Check every cataloged algebraic law against the default environment."""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path

from bilby_py import build_environment
from bilby_py.conformance import by_structure, report_payload, results_to_markdown, run_laws, summarize
from bilby_py.laws import default_laws, laws_for


def _build_markdown(results, seed: int | None) -> str:
    overall = summarize(results)
    lines = [
        "# Law Conformance Report",
        "",
        f"Seed: `{'per law' if seed is None else seed}`",
        "",
        results_to_markdown(results),
        "",
        "## By structure",
        "",
        "| Structure | Laws | Held | Falsified | Trials | Status |",
        "|---|---:|---:|---:|---:|---|",
    ]
    for structure, summary in by_structure(results).items():
        lines.append(
            f"| {structure} | {summary.laws} | {summary.held} | {summary.falsified} | {summary.trials} | {summary.status} |"
        )
    lines.extend(
        [
            "",
            "## Summary",
            "",
            f"- Laws checked: {overall.laws}",
            f"- Held: {overall.held}",
            f"- Falsified: {overall.falsified}",
            f"- Trials run: {overall.trials}",
            f"- Status: `{overall.status}`",
        ]
    )
    return "\n".join(lines)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--seed", type=int, default=None, help="seed for input generation (fresh per law if omitted)")
    parser.add_argument("--goal", type=int, default=None, help="number of trials per law")
    parser.add_argument(
        "--structure",
        default=None,
        help="only check laws for this structure (list, string, option, either, validation, io, lens)",
    )
    parser.add_argument(
        "--json-out",
        default="output/conformance/law_conformance.json",
        help="where to write machine-readable conformance results",
    )
    parser.add_argument(
        "--markdown-out",
        default="output/conformance/law_conformance.md",
        help="where to write markdown summary",
    )
    parser.add_argument("--verbose", action="store_true", help="log each law as it is checked")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING, format="%(levelname)s %(name)s: %(message)s")

    env = build_environment()
    if args.goal is not None:
        env = env.property("goal", args.goal)
    laws = default_laws() if args.structure is None else laws_for(args.structure)

    results = run_laws(env, laws, seed=args.seed)

    report = _build_markdown(results, args.seed)
    print(report)

    for out, text in (
        (Path(args.json_out), json.dumps(report_payload(results, seed=args.seed), indent=2)),
        (Path(args.markdown_out), report + "\n"),
    ):
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_text(text, encoding="utf-8")

    return 1 if summarize(results).status == "fail" else 0


if __name__ == "__main__":
    raise SystemExit(main())

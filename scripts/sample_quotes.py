#!/usr/bin/env python3
from __future__ import annotations

import argparse
import asyncio
import json
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any


def _repo_root() -> Path:
    return Path(__file__).resolve().parents[1]


def _bootstrap_pythonpath() -> None:
    import sys

    src = _repo_root() / "src"
    if str(src) not in sys.path:
        sys.path.insert(0, str(src))


_bootstrap_pythonpath()

from quote_relay.config import get_settings  # noqa: E402
from quote_relay.errors import QuoteError  # noqa: E402
from quote_relay.service.quote import QuoteService  # noqa: E402


@dataclass
class Sample:
    topic: str
    language: str
    note: str = ""


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Generate quotes for a batch of topics and report the results.")
    parser.add_argument(
        "--input",
        default="samples/topics.jsonl",
        help="JSONL file with fields: topic, language, optional note.",
    )
    parser.add_argument(
        "--output-md",
        default="",
        help="Markdown report path. Default: samples/reports/quotes_<timestamp>.md",
    )
    parser.add_argument(
        "--output-json",
        default="",
        help="JSON report path. Default: samples/reports/quotes_<timestamp>.json",
    )
    parser.add_argument("--limit", type=int, default=0, help="Limit sampled topics (0 means all).")
    return parser.parse_args()


def load_samples(path: Path, limit: int) -> list[Sample]:
    samples: list[Sample] = []
    with path.open("r", encoding="utf-8") as f:
        for line_no, line in enumerate(f, start=1):
            raw = line.strip()
            if not raw:
                continue
            row = json.loads(raw)
            topic = str(row.get("topic", "")).strip()
            language = str(row.get("language", "en")).strip().lower()
            note = str(row.get("note", "")).strip()
            if not topic:
                raise ValueError(f"Invalid sample at line {line_no}: topic required")
            samples.append(Sample(topic=topic, language=language, note=note))
            if limit > 0 and len(samples) >= limit:
                break
    if not samples:
        raise ValueError("No samples loaded.")
    return samples


async def generate_quotes(samples: list[Sample], service: QuoteService | None = None) -> list[dict[str, Any]]:
    if service is None:
        settings = get_settings()
        settings.require_api_key()
        service = QuoteService(settings)
    rows: list[dict[str, Any]] = []
    for sample in samples:
        row: dict[str, Any] = {"topic": sample.topic, "language": sample.language, "note": sample.note}
        try:
            quote = await service.get_quote(sample.topic, sample.language)
        except QuoteError as exc:
            row.update({"ok": False, "status_code": exc.status_code, **exc.as_payload()})
        except Exception as exc:
            row.update(
                {
                    "ok": False,
                    "status_code": 500,
                    "error": "An internal server error occurred.",
                    "details": f"{exc.__class__.__name__}: {exc}",
                }
            )
        else:
            row.update(
                {
                    "ok": True,
                    "quote": quote.text,
                    "word_count": quote.word_count,
                    "truncated": quote.truncated,
                }
            )
        rows.append(row)
    return rows


def summarize(rows: list[dict[str, Any]]) -> dict[str, Any]:
    total = len(rows)
    ok_rows = [r for r in rows if r["ok"]]
    truncated = sum(1 for r in ok_rows if r["truncated"])
    by_language: dict[str, int] = {}
    for r in ok_rows:
        by_language[r["language"]] = by_language.get(r["language"], 0) + 1
    return {
        "total": total,
        "ok": len(ok_rows),
        "failed": total - len(ok_rows),
        "truncated": truncated,
        "ok_by_language": by_language,
    }


def build_markdown_report(input_path: str, summary: dict[str, Any], rows: list[dict[str, Any]]) -> str:
    lines: list[str] = []
    lines.append("# Quote Sample Report")
    lines.append("")
    lines.append(f"- input: `{input_path}`")
    lines.append(f"- total: `{summary['total']}`")
    lines.append(f"- ok: `{summary['ok']}`")
    lines.append(f"- failed: `{summary['failed']}`")
    lines.append(f"- truncated: `{summary['truncated']}`")
    lines.append("")
    lines.append("## Quotes")
    lines.append("")
    lines.append("| language | topic | quote | words |")
    lines.append("|---|---|---|---:|")
    for r in rows:
        if r["ok"]:
            lines.append(f"| {r['language']} | {r['topic']} | {r['quote']} | {r['word_count']} |")
    lines.append("")
    lines.append("## Failures")
    lines.append("")
    failed = [r for r in rows if not r["ok"]]
    if not failed:
        lines.append("- none")
    else:
        for r in failed:
            lines.append(
                f"- topic=`{r['topic']}` language=`{r['language']}` status=`{r['status_code']}` error=`{r['error']}`"
            )
    lines.append("")
    return "\n".join(lines)


def write_report(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


async def main() -> int:
    args = parse_args()
    input_path = Path(args.input)
    samples = load_samples(input_path, args.limit)
    rows = await generate_quotes(samples)
    summary = summarize(rows)

    now = datetime.now().strftime("%Y%m%d_%H%M%S")
    md_path = Path(args.output_md) if args.output_md else Path(f"samples/reports/quotes_{now}.md")
    json_path = Path(args.output_json) if args.output_json else Path(f"samples/reports/quotes_{now}.json")

    write_report(md_path, build_markdown_report(str(input_path), summary, rows))
    write_report(
        json_path,
        json.dumps({"input": str(input_path), "summary": summary, "rows": rows}, ensure_ascii=False, indent=2),
    )

    print(f"[quote-sample] ok={summary['ok']} failed={summary['failed']} truncated={summary['truncated']}")
    print(f"[quote-sample] markdown={md_path}")
    print(f"[quote-sample] json={json_path}")
    return 0


if __name__ == "__main__":
    raise SystemExit(asyncio.run(main()))

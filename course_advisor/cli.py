"""
Batch runner for the course advisor.
Classifies and answers a file of learner queries without starting FastAPI.

- Reads CSV/XLSX with a ``Query`` column (optional ``Language`` column
  pins the answer language per row)
- De-duplicates identical (query, language) pairs (runs once, fans out)
- Writes one row per input query: Query, Intent, Confidence, Language, Courses
"""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import pandas as pd
from loguru import logger

from .config import CATALOG_PATH
from .engine import QueryEngine
from .normalize import basic_clean

OUTPUT_COLUMNS = ["Query", "Intent", "Confidence", "Language", "Courses"]


def load_queries(path: Path) -> List[Tuple[str, Optional[str]]]:
    ext = path.suffix.lower()
    df = pd.read_excel(path) if ext in {".xlsx", ".xls"} else pd.read_csv(path)
    cols = {c.lower(): c for c in df.columns}
    qcol = cols.get("query")
    if not qcol:
        raise ValueError(f"Expected column 'Query' in {path}. Found: {list(df.columns)}")
    lcol = cols.get("language")
    queries = df[qcol].fillna("").astype(str).map(basic_clean).tolist()
    if lcol:
        langs = [str(v).strip().lower() if pd.notna(v) and str(v).strip() else None for v in df[lcol]]
    else:
        langs = [None] * len(queries)
    return list(zip(queries, langs))


def _dedup_preserve_order(seq: List[Tuple[str, Optional[str]]]) -> List[Tuple[str, Optional[str]]]:
    return list(dict.fromkeys(seq))


def answer_queries(engine: QueryEngine, rows: List[Tuple[str, Optional[str]]]) -> pd.DataFrame:
    unique = _dedup_preserve_order(rows)
    logger.info("Answering {} unique queries ({} rows)", len(unique), len(rows))
    answers: Dict[Tuple[str, Optional[str]], List] = {}
    for query, lang in unique:
        context = {"preferredLanguage": lang} if lang else None
        result = engine.process_query(query, context)
        answers[(query, lang)] = [
            query,
            result.intent.value,
            result.confidence,
            result.language,
            ";".join(c.id for c in result.suggested_courses),
        ]
    return pd.DataFrame([answers[r] for r in rows], columns=OUTPUT_COLUMNS)


def main(argv: Optional[List[str]] = None) -> None:
    ap = argparse.ArgumentParser(description="Run the course advisor over a file of queries")
    ap.add_argument("--in", dest="inp", required=True, help="CSV/XLSX file with a Query column")
    ap.add_argument("--out", dest="out", default="artifacts/answers.csv", help="output CSV")
    ap.add_argument("--catalog", default=str(CATALOG_PATH), help="catalog JSON file")
    args = ap.parse_args(argv)

    engine = QueryEngine.from_catalog_file(Path(args.catalog))
    rows = load_queries(Path(args.inp))
    df = answer_queries(engine, rows)

    out = Path(args.out)
    out.parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(out, index=False)
    logger.info("Wrote {} rows to {}", len(df), out)


if __name__ == "__main__":
    main()

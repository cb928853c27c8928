"""
Report how well an NKP CSV fits the search engine's expectations.
Counts rows, checks that case/decision numbers decode as Roman numerals and
that decision dates parse as BS dates. Rows failing those checks can never
match a case-number, decision-number or date-range search.
"""
import os
import sys
import json
import argparse
import logging
from collections import Counter

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir))
SRC_DIR = os.path.join(PROJECT_ROOT, "src")
if SRC_DIR not in sys.path:
    sys.path.insert(0, SRC_DIR)

from nkp_search.data.loader import load_rows  # noqa: E402
from nkp_search.exceptions import SearchDataError  # noqa: E402
from nkp_search.numerals import parse_bs_date, roman_to_int  # noqa: E402
from nkp_search.search.criteria import SearchCriteria  # noqa: E402

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("check_dataset")

DEFAULT_SOURCE = os.path.join("data", "nkp_data.csv")
EXPECTED_COLUMNS = [
    "id", "link", "title", "ijlas_name", "mudda_type_value", "mudda_type_text",
    "mudda_name_value", "mudda_name_text", "faisala_type_value", "decision_no", "case_no",
    "nkp_volume", "nkp_year", "nkp_month", "nkp_issue", "decision_date", "judges",
    "subject", "petitioner", "respondent", "lawyers",
]


def dataset_report(rows, samples: int = 5) -> dict:
    columns = sorted({k for r in rows for k in r})
    report = {
        "rows": len(rows),
        "columns": columns,
        "missing_columns": [c for c in EXPECTED_COLUMNS if c not in columns],
    }
    for col in ("case_no", "decision_no"):
        bad = Counter()
        ok = empty = 0
        for r in rows:
            value = str(r.get(col, "")).strip()
            if not value:
                empty += 1
            elif roman_to_int(value) is None:
                bad[value] += 1
            else:
                ok += 1
        report[col] = {"roman": ok, "empty": empty, "non_roman": sum(bad.values()),
                       "non_roman_samples": [v for v, _ in bad.most_common(samples)]}
    dates_ok = sum(1 for r in rows if parse_bs_date(str(r.get("decision_date", ""))))
    report["decision_date"] = {"parsed": dates_ok, "unparsed": len(rows) - dates_ok}
    return report


def main():
    parser = argparse.ArgumentParser(description="Check an NKP CSV dataset")
    parser.add_argument("source", nargs="?", default=DEFAULT_SOURCE, help="CSV path or URL")
    parser.add_argument("--samples", type=int, default=5, help="Sample non-Roman values to show")
    parser.add_argument("--fields", action="store_true", help="Also list the accepted search criteria fields")
    args = parser.parse_args()

    try:
        rows = load_rows(args.source)
    except SearchDataError as e:
        logger.error(f"Failed to load dataset: {e}")
        sys.exit(1)

    report = dataset_report(rows, args.samples)
    if args.fields:
        report["criteria_fields"] = {name: f.alias for name, f in SearchCriteria.model_fields.items()}
    print(json.dumps(report, indent=2, ensure_ascii=False))

if __name__ == "__main__":
    main()

"""Hit a running NKP search API and print what comes back.

Usage: python scripts/smoke_client.py [--url http://127.0.0.1:5002] [--api-key KEY]
"""
import os
import sys
import json
import argparse
import requests

DEFAULT_URL = os.environ.get("SMOKE_URL") or os.environ.get("DEV_URL", "http://127.0.0.1:5002")

SAMPLE_SEARCHES = [
    ("date range", {"criteria": {"faisalaMitiFromYear": "२०७०", "faisalaMitiFromMonth": "१",
                                 "faisalaMitiFromDay": "१"}, "page_size": 3}),
    ("romanized judge", {"criteria": {"nyayadhish": "hari krishna"}, "page_size": 3}),
    ("sorted by date", {"sort_column": "decision_date", "sort_direction": "desc", "page_size": 3}),
]


class SmokeClient:
    def __init__(self, base_url: str, api_key: str = ""):
        self.api = f"{base_url.rstrip('/')}/api"
        self.session = requests.Session()
        if api_key:
            self.session.headers["X-API-Key"] = api_key

    def get(self, path: str):
        r = self.session.get(f"{self.api}{path}", timeout=10)
        r.raise_for_status()
        return r

    def search(self, payload: dict):
        r = self.session.post(f"{self.api}/search", json=payload, timeout=30)
        r.raise_for_status()
        return r.json()


def main():
    parser = argparse.ArgumentParser(description="Smoke test a running NKP search API")
    parser.add_argument("--url", default=DEFAULT_URL)
    parser.add_argument("--api-key", default=os.environ.get("API_KEY", ""))
    args = parser.parse_args()

    client = SmokeClient(args.url, args.api_key)
    print(f"[smoke] Target: {client.api}")
    for path in ("/health/live", "/health/ready", "/version", "/search/options"):
        print(f"[smoke] {path}:", client.get(path).status_code)

    for label, payload in SAMPLE_SEARCHES:
        try:
            body = client.search(payload)
        except requests.HTTPError as he:
            status = he.response.status_code if he.response is not None else None
            if status in (500, 503):
                print(f"[smoke] search ({label}) dataset error ({status}):", he.response.json().get("error"))
                continue
            raise
        first = body["results"][0] if body["results"] else {}
        print(f"[smoke] search ({label}): total={body['total']} timing_ms={body['timing_ms']}",
              json.dumps({k: first.get(k) for k in ("resultId", "title", "decision_date", "nkp_details")},
                         ensure_ascii=False))

    stats = client.get("/stats/search").json()
    print("[smoke] /stats/search:", json.dumps(stats, ensure_ascii=False))

if __name__ == "__main__":
    try:
        main()
    except Exception as e:
        print("[smoke] FAILED:", e)
        sys.exit(1)

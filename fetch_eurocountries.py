import argparse
import json
import logging
import time
from typing import Dict, List

import requests

from eurocountries import EURO_COUNTRIES, build_catalog

logger = logging.getLogger(__name__)

RESTCOUNTRIES_URL = "https://restcountries.com/v3.1/region/europe"
USER_AGENT = "euro-geo-guesser/1.0 (catalog refresh)"
DEFAULT_OUTPUT = "eurocountries.json"

# Rest Countries names that differ from the quiz's canonical names
NAME_OVERRIDES = {
    "Czechia": "Czech Republic",
}


def fetch_european_countries() -> List[Dict]:
    """Return raw rows from Rest Countries for the Europe region."""
    params = {"fields": "name,capital,latlng,unMember"}
    resp = requests.get(RESTCOUNTRIES_URL, params=params, timeout=30, headers={"User-Agent": USER_AGENT})
    resp.raise_for_status()
    return resp.json()


def build_rows(raw_countries: List[Dict], known: List[Dict]) -> List[Dict]:
    """Turn API rows into catalog rows.

    Facts come from the built-in catalog when the country is already known;
    new countries get a placeholder fact.
    """
    facts = {c["country"]: c.get("fact", "") for c in known}
    rows: List[Dict] = []
    for item in raw_countries:
        name = (item.get("name", {}).get("common") or "").strip()
        name = NAME_OVERRIDES.get(name, name)
        capitals = item.get("capital") or []
        latlng = item.get("latlng") or []
        if not name or not capitals or len(latlng) != 2:
            logger.debug("Skipping incomplete entry %r", name)
            continue
        rows.append({
            "country": name,
            "capital": (capitals[0] or "").strip(),
            "fact": facts.get(name) or ("UN member state" if item.get("unMember") else "Not a UN member state"),
            "latitude": float(latlng[0]),
            "longitude": float(latlng[1]),
        })

    # Deduplicate by country name and sort
    unique: Dict[str, Dict] = {}
    for r in rows:
        unique[r["country"]] = r
    return sorted(unique.values(), key=lambda r: r["country"])


def save_catalog(rows: List[Dict], path: str) -> None:
    # Validate before writing so the app never gets a file it would reject
    build_catalog(rows)
    with open(path, "w", encoding="utf-8") as f:
        json.dump({"generated_at": int(time.time()), "countries": rows}, f, ensure_ascii=False, indent=2)


def main(argv=None):
    parser = argparse.ArgumentParser(description="Refresh the European country catalog from Rest Countries.")
    parser.add_argument("--output", default=DEFAULT_OUTPUT, help="where to write the catalog JSON")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
    rows = build_rows(fetch_european_countries(), EURO_COUNTRIES)
    save_catalog(rows, args.output)
    kept = sum(1 for r in rows if r["country"] in {c["country"] for c in EURO_COUNTRIES})
    print(f"Wrote {len(rows)} countries ({kept} with known facts) to {args.output}. "
          f"Use it with EURO_GEO_CATALOG={args.output}")


if __name__ == "__main__":
    main()

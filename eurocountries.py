# eurocountries.py
import json
import logging
import os
import pathlib
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple

logger = logging.getLogger(__name__)

# ---------- Config ----------
CATALOG_ENV_VAR = "EURO_GEO_CATALOG"


class CatalogError(ValueError):
    """Raised when catalog rows cannot be turned into target countries."""


@dataclass(frozen=True)
class TargetCountry:
    name: str
    capital: str
    fact: str
    latitude: float
    longitude: float

    @property
    def location(self) -> Tuple[float, float]:
        return (self.latitude, self.longitude)


# Built-in catalog: the 50 countries of the European quiz.
# Coordinates are rough geographic centers, used only for hint pins.
EURO_COUNTRIES: List[Dict] = [
    {"country": "Albania", "capital": "Tirana", "fact": "Albania has more than 170,000 concrete bunkers built during the communist era.", "latitude": 41.15, "longitude": 20.17},
    {"country": "Andorra", "capital": "Andorra la Vella", "fact": "Andorra has two heads of state: the Bishop of Urgell and the President of France.", "latitude": 42.55, "longitude": 1.60},
    {"country": "Armenia", "capital": "Yerevan", "fact": "Armenia was the first country to adopt Christianity as a state religion, in 301 AD.", "latitude": 40.07, "longitude": 45.04},
    {"country": "Austria", "capital": "Vienna", "fact": "The Vienna Zoo, founded in 1752, is the oldest zoo still operating in the world.", "latitude": 47.52, "longitude": 14.55},
    {"country": "Azerbaijan", "capital": "Baku", "fact": "Azerbaijan is home to nearly half of the world's mud volcanoes.", "latitude": 40.14, "longitude": 47.58},
    {"country": "Belarus", "capital": "Minsk", "fact": "Belarus is sometimes called the lungs of Europe because forests cover about 40% of it.", "latitude": 53.71, "longitude": 27.95},
    {"country": "Belgium", "capital": "Brussels", "fact": "Belgium has three official languages: Dutch, French and German.", "latitude": 50.50, "longitude": 4.47},
    {"country": "Bosnia and Herzegovina", "capital": "Sarajevo", "fact": "Sarajevo hosted the 1984 Winter Olympics.", "latitude": 43.92, "longitude": 17.68},
    {"country": "Bulgaria", "capital": "Sofia", "fact": "Bulgaria is one of the world's largest producers of rose oil.", "latitude": 42.73, "longitude": 25.49},
    {"country": "Croatia", "capital": "Zagreb", "fact": "The necktie traces its origin to the cravats worn by Croatian soldiers.", "latitude": 45.10, "longitude": 15.20},
    {"country": "Cyprus", "capital": "Nicosia", "fact": "Nicosia is the last divided capital city in Europe.", "latitude": 35.13, "longitude": 33.43},
    {"country": "Czech Republic", "capital": "Prague", "fact": "The Czech Republic has one of the highest densities of castles in the world.", "latitude": 49.82, "longitude": 15.47},
    {"country": "Denmark", "capital": "Copenhagen", "fact": "The Danish flag is the oldest continuously used national flag.", "latitude": 56.26, "longitude": 9.50},
    {"country": "Estonia", "capital": "Tallinn", "fact": "Estonia was the first country to offer online voting in a national election.", "latitude": 58.60, "longitude": 25.01},
    {"country": "Finland", "capital": "Helsinki", "fact": "Finland has around 188,000 lakes.", "latitude": 61.92, "longitude": 25.75},
    {"country": "France", "capital": "Paris", "fact": "France is the most visited country in the world.", "latitude": 46.23, "longitude": 2.21},
    {"country": "Georgia", "capital": "Tbilisi", "fact": "Georgia has one of the oldest winemaking traditions, dating back 8,000 years.", "latitude": 42.32, "longitude": 43.36},
    {"country": "Germany", "capital": "Berlin", "fact": "Germany has more than 1,500 different types of beer.", "latitude": 51.17, "longitude": 10.45},
    {"country": "Greece", "capital": "Athens", "fact": "Greece has about 6,000 islands, of which only around 200 are inhabited.", "latitude": 39.07, "longitude": 21.82},
    {"country": "Hungary", "capital": "Budapest", "fact": "Budapest sits on top of more than 100 thermal springs.", "latitude": 47.16, "longitude": 19.50},
    {"country": "Iceland", "capital": "Reykjavik", "fact": "Iceland has no mosquitoes.", "latitude": 64.96, "longitude": -19.02},
    {"country": "Ireland", "capital": "Dublin", "fact": "Halloween has its roots in the ancient Irish festival of Samhain.", "latitude": 53.41, "longitude": -8.24},
    {"country": "Italy", "capital": "Rome", "fact": "Italy has more UNESCO World Heritage Sites than any other country.", "latitude": 41.87, "longitude": 12.57},
    {"country": "Kosovo", "capital": "Pristina", "fact": "Kosovo has one of the youngest populations in Europe.", "latitude": 42.60, "longitude": 20.90},
    {"country": "Latvia", "capital": "Riga", "fact": "Riga claims to be the home of the first decorated Christmas tree, in 1510.", "latitude": 56.88, "longitude": 24.60},
    {"country": "Liechtenstein", "capital": "Vaduz", "fact": "Liechtenstein is one of only two doubly landlocked countries.", "latitude": 47.17, "longitude": 9.56},
    {"country": "Lithuania", "capital": "Vilnius", "fact": "Lithuanian is one of the oldest surviving Indo-European languages.", "latitude": 55.17, "longitude": 23.88},
    {"country": "Luxembourg", "capital": "Luxembourg", "fact": "Luxembourg made all public transport free in 2020.", "latitude": 49.82, "longitude": 6.13},
    {"country": "Malta", "capital": "Valletta", "fact": "Valletta was the first planned city in Europe.", "latitude": 35.94, "longitude": 14.38},
    {"country": "Moldova", "capital": "Chisinau", "fact": "Moldova's Milestii Mici holds the world's largest wine collection.", "latitude": 47.41, "longitude": 28.37},
    {"country": "Monaco", "capital": "Monaco", "fact": "Monaco is the second smallest country in the world.", "latitude": 43.74, "longitude": 7.42},
    {"country": "Montenegro", "capital": "Podgorica", "fact": "Montenegro uses the euro without being a member of the eurozone.", "latitude": 42.71, "longitude": 19.37},
    {"country": "Netherlands", "capital": "Amsterdam", "fact": "About a quarter of the Netherlands lies below sea level.", "latitude": 52.13, "longitude": 5.29},
    {"country": "North Macedonia", "capital": "Skopje", "fact": "Mother Teresa was born in Skopje.", "latitude": 41.61, "longitude": 21.75},
    {"country": "Norway", "capital": "Oslo", "fact": "Norway introduced salmon sushi to Japan in the 1980s.", "latitude": 60.47, "longitude": 8.47},
    {"country": "Poland", "capital": "Warsaw", "fact": "Poland is home to the largest castle in the world by land area, Malbork.", "latitude": 51.92, "longitude": 19.15},
    {"country": "Portugal", "capital": "Lisbon", "fact": "Portugal is the world's largest producer of cork.", "latitude": 39.40, "longitude": -8.22},
    {"country": "Romania", "capital": "Bucharest", "fact": "The Palace of the Parliament in Bucharest is the heaviest building in the world.", "latitude": 45.94, "longitude": 24.97},
    {"country": "Russia", "capital": "Moscow", "fact": "Russia spans eleven time zones.", "latitude": 55.75, "longitude": 37.62},
    {"country": "San Marino", "capital": "San Marino", "fact": "San Marino is the oldest surviving republic in the world, founded in 301 AD.", "latitude": 43.94, "longitude": 12.46},
    {"country": "Serbia", "capital": "Belgrade", "fact": "Serbia is one of the largest raspberry exporters in the world.", "latitude": 44.02, "longitude": 21.01},
    {"country": "Slovakia", "capital": "Bratislava", "fact": "Slovakia has the highest number of castles and chateaux per capita in the world.", "latitude": 48.67, "longitude": 19.70},
    {"country": "Slovenia", "capital": "Ljubljana", "fact": "More than half of Slovenia is covered by forest.", "latitude": 46.15, "longitude": 14.99},
    {"country": "Spain", "capital": "Madrid", "fact": "Spain produces almost half of the world's olive oil.", "latitude": 40.46, "longitude": -3.75},
    {"country": "Sweden", "capital": "Stockholm", "fact": "Sweden has a right of public access that lets anyone roam freely in nature.", "latitude": 60.13, "longitude": 18.64},
    {"country": "Switzerland", "capital": "Bern", "fact": "Switzerland has four national languages.", "latitude": 46.82, "longitude": 8.23},
    {"country": "Turkey", "capital": "Ankara", "fact": "Istanbul is the only major city located on two continents.", "latitude": 38.96, "longitude": 35.24},
    {"country": "Ukraine", "capital": "Kyiv", "fact": "Ukraine is the largest country entirely within Europe.", "latitude": 48.38, "longitude": 31.17},
    {"country": "United Kingdom", "capital": "London", "fact": "The London Underground is the oldest metro system in the world.", "latitude": 55.38, "longitude": -3.44},
    {"country": "Vatican City", "capital": "Vatican City", "fact": "Vatican City is the smallest country in the world.", "latitude": 41.90, "longitude": 12.45},
]


def country_from_dict(raw: Dict) -> TargetCountry:
    """Return a TargetCountry from a catalog row.

    Rows use the data-file shape {country, capital, fact, latitude, longitude}.
    """
    name = (raw.get("country") or "").strip()
    capital = (raw.get("capital") or "").strip()
    if not name:
        raise CatalogError(f"Catalog row without a country name: {raw!r}")
    if not capital:
        raise CatalogError(f"Catalog row for {name} has no capital")
    try:
        latitude = float(raw.get("latitude"))
        longitude = float(raw.get("longitude"))
    except (TypeError, ValueError) as exc:
        raise CatalogError(f"Catalog row for {name} has invalid coordinates") from exc
    return TargetCountry(
        name=name,
        capital=capital,
        fact=(raw.get("fact") or "").strip(),
        latitude=latitude,
        longitude=longitude,
    )


def build_catalog(rows: Iterable[Dict]) -> Tuple[TargetCountry, ...]:
    countries: List[TargetCountry] = []
    seen = set()
    for row in rows:
        country = country_from_dict(row)
        # Guesses are matched case-insensitively, so names must be unique that way too
        key = country.name.casefold()
        if key in seen:
            raise CatalogError(f"Duplicate country in catalog: {country.name}")
        seen.add(key)
        countries.append(country)
    if not countries:
        raise CatalogError("Catalog is empty")
    return tuple(countries)


def _read_catalog_file(path: pathlib.Path) -> List[Dict]:
    raw = json.loads(path.read_text(encoding="utf-8"))
    if isinstance(raw, dict):
        raw = raw.get("countries", [])
    if not isinstance(raw, list):
        raise CatalogError(f"{path} does not contain a list of countries")
    return raw


def load_catalog(path: Optional[str] = None) -> Tuple[TargetCountry, ...]:
    """Load the reference catalog once, in file order.

    A JSON file given by `path` (or the EURO_GEO_CATALOG environment variable)
    replaces the built-in list. If that file is missing or invalid, the
    built-in list is used instead.
    """
    source = path or os.environ.get(CATALOG_ENV_VAR)
    if source:
        catalog_path = pathlib.Path(source).expanduser()
        try:
            catalog = build_catalog(_read_catalog_file(catalog_path))
            logger.info("Loaded %d countries from %s", len(catalog), catalog_path)
            return catalog
        except (OSError, ValueError) as exc:
            # json.JSONDecodeError and CatalogError are both ValueErrors
            logger.warning("Could not load catalog from %s (%s); using built-in list", catalog_path, exc)
    return build_catalog(EURO_COUNTRIES)

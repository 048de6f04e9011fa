import json

import pytest

from eurocountries import (
    CATALOG_ENV_VAR,
    EURO_COUNTRIES,
    CatalogError,
    build_catalog,
    country_from_dict,
    load_catalog,
)


def test_builtin_catalog_has_fifty_unique_countries():
    catalog = load_catalog()
    assert len(catalog) == 50
    assert len({c.name.lower() for c in catalog}) == 50
    assert [c.name for c in catalog] == [row['country'] for row in EURO_COUNTRIES]
    for country in catalog:
        lat, lon = country.location
        assert 30 < lat < 72
        assert -30 < lon < 60
        assert country.capital and country.fact


def test_country_from_dict_strips_and_coerces():
    country = country_from_dict({
        'country': ' Malta ', 'capital': 'Valletta', 'fact': 'Small.',
        'latitude': '35.9', 'longitude': 14.4,
    })
    assert country.name == 'Malta'
    assert country.location == (35.9, 14.4)


@pytest.mark.parametrize('row', [
    {'country': '', 'capital': 'X', 'latitude': 1, 'longitude': 1},
    {'country': 'X', 'capital': '  ', 'latitude': 1, 'longitude': 1},
    {'country': 'X', 'capital': 'Y', 'latitude': 'north', 'longitude': 1},
    {'country': 'X', 'capital': 'Y', 'longitude': 1},
])
def test_country_from_dict_rejects_bad_rows(row):
    with pytest.raises(CatalogError):
        country_from_dict(row)


def test_build_catalog_rejects_case_insensitive_duplicates():
    rows = [
        {'country': 'France', 'capital': 'Paris', 'latitude': 1, 'longitude': 1},
        {'country': 'FRANCE', 'capital': 'Paris', 'latitude': 1, 'longitude': 1},
    ]
    with pytest.raises(CatalogError):
        build_catalog(rows)


def test_build_catalog_rejects_empty():
    with pytest.raises(CatalogError):
        build_catalog([])


def test_load_catalog_from_file(tmp_path):
    path = tmp_path / 'catalog.json'
    path.write_text(json.dumps({'countries': [
        {'country': 'Spain', 'capital': 'Madrid', 'fact': 'Olive oil.', 'latitude': 40.4, 'longitude': -3.7},
        {'country': 'France', 'capital': 'Paris', 'fact': 'Visitors.', 'latitude': 46.2, 'longitude': 2.2},
    ]}), encoding='utf-8')
    catalog = load_catalog(str(path))
    assert [c.name for c in catalog] == ['Spain', 'France']


def test_load_catalog_from_env(tmp_path, monkeypatch):
    path = tmp_path / 'catalog.json'
    path.write_text(json.dumps([
        {'country': 'Iceland', 'capital': 'Reykjavik', 'latitude': 64.9, 'longitude': -19.0},
    ]), encoding='utf-8')
    monkeypatch.setenv(CATALOG_ENV_VAR, str(path))
    assert [c.name for c in load_catalog()] == ['Iceland']


@pytest.mark.parametrize('content', ['not json', '{"countries": []}', '"a string"'])
def test_load_catalog_falls_back_on_bad_file(tmp_path, content, caplog):
    path = tmp_path / 'catalog.json'
    path.write_text(content, encoding='utf-8')
    catalog = load_catalog(str(path))
    assert len(catalog) == 50
    assert 'using built-in list' in caplog.text


def test_load_catalog_falls_back_on_missing_file(tmp_path):
    assert len(load_catalog(str(tmp_path / 'missing.json'))) == 50

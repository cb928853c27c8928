import json

import pytest

from nkp_search.api import config, dependencies, state
from nkp_search.api.server import app

from conftest import FIXTURE_CSV


@pytest.fixture
def client():
    with app.test_client() as c:
        yield c


def _post(c, payload, **kwargs):
    return c.post('/api/search', data=json.dumps(payload), content_type='application/json', **kwargs)


def test_health(client):
    r = client.get('/api/health')
    assert r.status_code == 200
    assert r.get_json()['rows'] == 5


def test_health_live_and_ready(client):
    assert client.get('/api/health/live').get_json() == {"alive": True}
    r = client.get('/api/health/ready')
    assert r.status_code == 200
    assert r.get_json()['checks']['dataset_configured'] is True


def test_search_empty_criteria(client):
    r = _post(client, {})
    assert r.status_code == 200
    j = r.get_json()
    assert j['total'] == 5
    assert j['pages'] == 1
    rids = [item['resultId'] for item in j['results']]
    assert len(set(rids)) == 5
    assert j['results'][0]['nkp_details'] == "भाग ६४, साल २०७९, महिना ३, अंक ५"


def test_search_by_form_fields(client):
    r = _post(client, {"criteria": {"muddaNo": "१४", "ijalashkoNaam": "संयुक्त इजलास"}})
    assert r.status_code == 200
    assert [item['id'] for item in r.get_json()['results']] == ["1", "3"]


def test_search_sorted_and_paged(client):
    r = _post(client, {"sort_column": "decision_date", "sort_direction": "desc", "page": 2, "page_size": 2})
    j = r.get_json()
    assert r.status_code == 200
    assert (j['page'], j['pages'], j['total']) == (2, 3, 5)
    assert [item['id'] for item in j['results']] == ["1", "2"]


def test_search_validation_failure(client):
    r = _post(client, {"criteria": {"shabdabata": "X" * 5000}})
    assert r.status_code == 400
    assert r.get_json().get('error') == 'validation_failed'


def test_search_bad_sort_column(client):
    r = _post(client, {"sort_column": "link"})
    assert r.status_code == 400


def test_search_body_must_be_object(client):
    r = _post(client, ["muddaNo"])
    assert r.status_code == 400


def test_search_dataset_unavailable(client, tmp_path):
    dependencies.init_loader(source=str(tmp_path / "missing.csv"))
    try:
        r = _post(client, {"lang": "en"})
        assert r.status_code == 503
        j = r.get_json()
        assert j['error'] == 'data_unavailable'
        assert j['message'].startswith("Unable to load the search data file")
        r = _post(client, {}, headers={"Accept-Language": "ne"})
        assert r.get_json()['message'].startswith("खोज डाटा फाइल")
    finally:
        dependencies.init_loader(source=FIXTURE_CSV)


def test_search_dataset_corrupt(client, tmp_path):
    bad = tmp_path / "bad.csv"
    bad.write_text(",,\n1,2,3\n", encoding="utf-8")
    dependencies.init_loader(source=str(bad))
    try:
        r = _post(client, {"lang": "en"})
        assert r.status_code == 500
        assert r.get_json()['error'] == 'data_corrupt'
    finally:
        dependencies.init_loader(source=FIXTURE_CSV)


def test_search_options(client):
    r = client.get('/api/search/options')
    assert r.status_code == 200
    j = r.get_json()
    assert "रिट" in j['case_types']
    assert j['months'][0] == "१"


def test_search_stats(client):
    _post(client, {"criteria": {"muddaNo": "999"}})
    j = client.get('/api/stats/search').get_json()
    assert j['total_searches'] >= 1
    assert j['empty_results'] >= 1
    assert '_results_sum' not in j
    assert 'transliteration_cache' in j


def test_fuzzy_options_follow_config(monkeypatch):
    monkeypatch.setattr(config, "FUZZY_THRESHOLD", 0.2)
    monkeypatch.setattr(config, "FUZZY_MIN_MATCH_LENGTH", 5)
    try:
        dependencies.init_loader(source=FIXTURE_CSV)
        assert state.fuzzy_options.threshold == 0.2
        assert state.fuzzy_options.min_match_length == 5
        assert state.fuzzy_options.distance == config.FUZZY_DISTANCE
    finally:
        monkeypatch.undo()
        dependencies.init_loader(source=FIXTURE_CSV)


def test_dataset_reload(client):
    r = client.post('/api/dataset/reload')
    assert r.status_code == 200
    assert r.get_json()['source'] == state.loader.source


def test_version(client):
    j = client.get('/api/version').get_json()
    assert j['taxonomy']['version'] == 'v1'


def test_metrics_endpoint(client):
    _post(client, {})
    r = client.get('/metrics')
    assert r.status_code == 200
    assert 'text/plain' in r.content_type
    body = r.get_data(as_text=True)
    assert 'nkp_search_requests_total' in body
    assert 'nkp_search_searches_total' in body

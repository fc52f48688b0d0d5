import pytest
from fastapi.testclient import TestClient

import database
import main
from errors import ScrapeError, StorageError


@pytest.fixture
def client(tmp_path, monkeypatch, rich_page, make_page):
    monkeypatch.setattr(database, "DB_PATH", tmp_path / "api.db")
    pages = {
        "https://good.example/": rich_page,
        "https://bare.example/": make_page(load_time=5000),
    }

    def fake_scrape(url):
        if url not in pages:
            raise ScrapeError(url, "connection refused")
        return pages[url]

    monkeypatch.setattr(main, "scrape_website", fake_scrape)
    with TestClient(main.app) as test_client:
        yield test_client


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_analyze_stores_and_returns_report(client):
    response = client.post("/analyze", json={"url": "https://good.example/"})
    assert response.status_code == 200
    report = response.json()
    assert report["seo_score"] == 100
    assert report["ai_score"] == 100
    assert report["content_suggestions"]["ai_improvements"][0]["action"] == "Link to Authoritative Sources"
    assert "details" not in report["geo_results"][0]

    fetched = client.get(f"/reports/{report['id']}")
    assert fetched.status_code == 200
    assert fetched.json() == report


def test_analyze_toggles_substitute_empty_results(client):
    response = client.post(
        "/analyze",
        json={
            "url": "https://good.example/",
            "include_traditional_seo": False,
            "include_content_suggestions": False,
        },
    )
    report = response.json()
    assert report["seo_score"] == 0
    assert report["traditional_seo_results"] == []
    assert report["ai_score"] == 100
    assert report["content_suggestions"]["ai_visibility"] == {
        "chatgpt": "low",
        "perplexity": "low",
        "claude": "low",
        "bard": "low",
    }


def test_analyze_rejects_invalid_url(client):
    assert client.post("/analyze", json={"url": "not a url"}).status_code == 422


def test_scrape_failure_maps_to_bad_gateway(client):
    response = client.post("/analyze", json={"url": "https://down.example/"})
    assert response.status_code == 502
    assert "down.example" in response.json()["detail"]


def test_storage_failure_maps_to_server_error(client, monkeypatch):
    def broken(report):
        raise StorageError("disk full")

    monkeypatch.setattr(main, "create_report", broken)
    response = client.post("/analyze", json={"url": "https://good.example/"})
    assert response.status_code == 500


def test_missing_report_is_404(client):
    assert client.get("/reports/12345").status_code == 404


def test_reports_filter_by_url(client):
    client.post("/analyze", json={"url": "https://good.example/"})
    client.post("/analyze", json={"url": "https://bare.example/"})
    client.post("/analyze", json={"url": "https://good.example/"})

    assert len(client.get("/reports").json()) == 3
    filtered = client.get("/reports", params={"url": "https://bare.example/"}).json()
    assert [report["url"] for report in filtered] == ["https://bare.example/"]
    assert filtered[0]["seo_score"] == 0


def test_ai_visibility_endpoint(client):
    response = client.post("/ai-visibility", json={"url": "https://good.example/"})
    assert response.status_code == 200
    body = response.json()
    assert len(body["factors"]) == 12
    assert body["overall_score"] >= 80
    assert client.get("/reports").json() == []


def test_compare_endpoint(client):
    response = client.post("/compare", json={"url1": "https://bare.example/", "url2": "https://good.example/"})
    assert response.status_code == 200
    body = response.json()
    differences = body["differences"]
    assert differences["better_performer"] == "url2"
    assert differences["seo_score_diff"] == 100
    assert differences["ai_visibility_diff"] > 15
    assert {d["category"] for d in differences["key_differences"]} == {"seo", "ai", "visibility"}
    assert body["url1_report"]["url"] == "https://bare.example/"
    assert len(client.get("/reports").json()) == 2


def test_compare_stores_nothing_when_second_page_is_invalid(client, monkeypatch, rich_page, make_page):
    broken = make_page(load_time="slow")
    pages = {"https://good.example/": rich_page, "https://broken.example/": broken}
    monkeypatch.setattr(main, "scrape_website", lambda url: pages[url])

    response = client.post("/compare", json={"url1": "https://good.example/", "url2": "https://broken.example/"})
    assert response.status_code == 422
    assert "load_time" in response.json()["detail"]
    assert client.get("/reports").json() == []

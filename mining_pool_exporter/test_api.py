import logging

import pytest
from fastapi.testclient import TestClient
from prometheus_client.parser import text_string_to_metric_families

from conftest import make_response
from balance_exporter.api import create_app
from balance_exporter.config import Settings


@pytest.fixture
def client():
    settings = Settings(pool_url="http://pool.test", price_url="http://price.test")
    return TestClient(create_app(settings))


def parse(response):
    return {family.name: family for family in text_string_to_metric_families(response.text)}


def test_landing_page(client):
    response = client.get("/")

    assert response.status_code == 200
    assert "text/html" in response.headers["content-type"]
    assert "MiningPoolHub Exporter" in response.text
    assert "/metrics?apikey=apikey" in response.text


def test_metrics(client, upstream):
    response = client.get("/metrics", params={"apikey": "secret"})

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/plain")
    families = parse(response)
    assert len(families["miningpoolhub_info"].samples) == 1
    assert len(families["miningpoolhub_balance"].samples) == 10
    assert len(families["miningpoolhub_balance_converted"].samples) == 10

    [balance_call] = upstream.calls_to("/index.php")
    assert balance_call["params"]["api_key"] == "secret"
    [price_call] = upstream.calls_to("/data/price")
    assert price_call["params"]["fsym"] == "EUR"


def test_converted_values(client, upstream):
    upstream.balances = make_response(payload={
        "getuserallbalances": {
            "version": "1.0.0",
            "runtime": 1.0,
            "data": [{"coin": "bitcoin", "confirmed": 1.5, "unconfirmed": 0, "ae_confirmed": 0, "ae_unconfirmed": 0, "exchange": 0}]
        }
    })
    upstream.prices = make_response(payload={"BTC": 30000})

    families = parse(client.get("/metrics", params={"apikey": "secret", "fiat": "EUR"}))

    labels = {"coin": "bitcoin", "symbol": "BTC", "wallet": "normal", "status": "confirmed"}
    [raw] = [s for s in families["miningpoolhub_balance"].samples if s.labels == labels]
    [converted] = [s for s in families["miningpoolhub_balance_converted"].samples if s.labels == labels]
    assert raw.value == 1.5
    assert converted.value == pytest.approx(0.00005)


@pytest.mark.parametrize("params", [{}, {"apikey": ""}, {"fiat": "USD"}])
def test_missing_apikey(client, upstream, params):
    response = client.get("/metrics", params=params)

    assert response.status_code == 400
    assert response.json()["detail"] == "apikey must be provided"
    assert upstream.calls == []


@pytest.mark.parametrize("params, expected", [
    ({"fiat": "usd"}, "USD"),
    ({"conversion": "GBP"}, "GBP"),
    ({"fiat": "CHF", "conversion": "GBP"}, "CHF"),
    ({}, "EUR"),
])
def test_fiat_selection(client, upstream, params, expected):
    client.get("/metrics", params={"apikey": "secret", **params})

    [price_call] = upstream.calls_to("/data/price")
    assert price_call["params"]["fsym"] == expected


def test_balance_failure(client, upstream, caplog):
    upstream.balances = make_response(status_code=500, text="Internal Server Error")

    with caplog.at_level(logging.ERROR):
        response = client.get("/metrics", params={"apikey": "secret"})

    assert response.status_code == 200
    assert response.text == ""
    assert upstream.calls_to("/data/price") == []
    assert "Couldn't fetch balances" in caplog.text


def test_price_failure(client, upstream, caplog):
    upstream.prices = make_response(status_code=503, text="Service Unavailable")

    with caplog.at_level(logging.ERROR):
        response = client.get("/metrics", params={"apikey": "secret"})

    assert response.status_code == 200
    assert response.text == ""
    assert len(upstream.calls_to("/index.php")) == 1
    assert "Couldn't fetch prices" in caplog.text


def test_custom_metrics_path(upstream):
    settings = Settings(metrics_path="/probe", pool_url="http://pool.test", price_url="http://price.test")
    client = TestClient(create_app(settings))

    assert client.get("/probe", params={"apikey": "secret"}).status_code == 200
    assert client.get("/metrics", params={"apikey": "secret"}).status_code == 404
    assert "/probe?apikey=apikey" in client.get("/").text


@pytest.mark.parametrize("path", ["/", "metrics"])
def test_invalid_metrics_path(path):
    with pytest.raises(ValueError):
        Settings(metrics_path=path)

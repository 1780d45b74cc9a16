"""Tests pour les métriques Prometheus.

Ce module teste que les métriques HTTP et métier sont exposées via l'endpoint /metrics.
"""

from stargate.core.http_constants import HTTP_OK


def test_metrics_exposed(client):
    """Teste que l'endpoint /metrics expose les métriques Prometheus."""
    client.get("/Person")
    r = client.get("/metrics")
    assert r.status_code == HTTP_OK
    assert b"http_requests_total" in r.content
    assert b"http_request_duration_seconds" in r.content


def test_business_metrics(client):
    """Teste les compteurs métier: personnes créées, affectations, erreurs par type."""
    client.post("/Person", json="Neil Armstrong")
    client.post("/Person", json="Neil Armstrong")
    client.post(
        "/AstronautDuty",
        json={
            "name": "Neil Armstrong",
            "rank": "Capcom",
            "dutyTitle": "RETIRED",
            "dutyStartDate": "1971-08-01T00:00:00",
        },
    )
    text = client.get("/metrics").text
    assert "stargate_people_created_total" in text
    assert 'stargate_duties_recorded_total{retirement="true"}' in text
    assert 'stargate_command_errors_total{route="/Person",kind="conflict"}' in text
    # gabarit de route, pas le chemin concret
    client.get("/Person/Somebody")
    assert 'route="/Person/{name}"' in client.get("/metrics").text

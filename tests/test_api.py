from fastapi.testclient import TestClient

from cambio.core.config import Settings
from cambio.main import create_app

from .conftest import ADMIN_PASSWORD


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"
    assert "X-Request-ID" in resp.headers


def test_unknown_route_uses_error_envelope(client):
    resp = client.get("/nope")
    assert resp.status_code == 404
    assert resp.json()["error"] == "not_found"


class TestRatesEndpoints:
    def test_no_rate_published_yet(self, client):
        resp = client.get("/rates")
        assert resp.status_code == 404
        assert resp.json() == {"error": "not_found", "detail": "no rate published yet"}

    def test_publish_and_read(self, client, publish):
        body = publish(pyg=1450.0, usd=5.5)
        assert body["pyg"] == 1450.0
        assert body["usd"] == 5.5
        assert body["updated_at_pyg"] is not None

        read = client.get("/rates").json()
        assert read["pyg"] == 1450.0 and read["usd"] == 5.5

    def test_publish_one_currency(self, client, publish):
        body = publish(usd=5.25)
        assert body["usd"] == 5.25
        assert body["pyg"] is None

    def test_wrong_password(self, client):
        resp = client.post("/rates", json={"password": "guess", "pyg": 1450.0})
        assert resp.status_code == 401
        assert resp.json()["error"] == "unauthorized"

    def test_rejects_missing_non_positive_and_text_rates(self, client):
        for payload in (
            {"password": ADMIN_PASSWORD},
            {"password": ADMIN_PASSWORD, "pyg": 0.0},
            {"password": ADMIN_PASSWORD, "usd": -5.5},
            {"password": ADMIN_PASSWORD, "usd": "5,50"},
        ):
            resp = client.post("/rates", json=payload)
            assert resp.status_code == 422, payload
            assert resp.json()["error"] == "validation_error"
        assert client.get("/rates").status_code == 404

    def test_admin_password_not_configured(self, tmp_path):
        settings = Settings(data_dir=tmp_path, db_path=tmp_path / "x.db")
        client = TestClient(create_app(settings_override=settings))
        resp = client.post("/rates", json={"password": "", "pyg": 1450.0})
        assert resp.status_code == 500


class TestQuotesEndpoint:
    def test_rate_unavailable_before_publishing(self, client):
        resp = client.post("/quotes", json={"currency": "PYG", "pay_amount": "100,00"})
        assert resp.status_code == 200
        body = resp.json()
        assert body["status"] == "rate_unavailable"
        assert body["pay_amount"] == 0.0 and body["receive_amount"] == 0.0
        assert body["rate"] is None

    def test_guarani_pay_driven(self, client, publish):
        publish(pyg=1450.0)
        body = client.post(
            "/quotes", json={"currency": "PYG", "pay_amount": "100,00"}
        ).json()

        assert body["status"] == "ok"
        assert body["direction"] == "pay_given"
        assert body["pay_amount"] == 113.45
        assert body["receive_amount"] == 150000.0
        assert body["fee"] == 10.0
        assert body["rate"] == 1450.0
        assert body["delivery"]["id"] == "franco"

    def test_dollar_receive_driven_with_delivery(self, client, publish):
        publish(usd=5.5)
        body = client.post(
            "/quotes", json={"currency": "usd", "receive_amount": 37, "delivery": "km7"}
        ).json()

        assert body["status"] == "ok"
        assert body["pay_amount"] == 305.0
        assert body["receive_amount"] == 50.0
        assert body["fee"] == 20.0
        assert body["delivery_fee"] == 10.0

    def test_masked_guarani_input(self, client, publish):
        publish(pyg=1450.0)
        body = client.post(
            "/quotes", json={"currency": "PYG", "receive_amount": "150.000"}
        ).json()
        assert body["pay_amount"] == 113.45

    def test_declines(self, client, publish):
        publish(pyg=1450.0)
        both = client.post(
            "/quotes",
            json={"currency": "PYG", "pay_amount": 100, "receive_amount": 150000},
        ).json()
        zero = client.post("/quotes", json={"currency": "PYG", "pay_amount": "0,00"}).json()

        assert both["status"] == "declined"
        assert both["reason"] == "ambiguous_direction"
        assert zero["status"] == "declined"
        assert zero["reason"] == "invalid_input"
        assert zero["pay_amount"] == 0.0

    def test_amount_below_half_a_note_quotes_fee_and_delivery(self, client, publish):
        publish(usd=5.5)
        body = client.post(
            "/quotes", json={"currency": "USD", "receive_amount": 20, "delivery": "km7"}
        ).json()

        assert body["status"] == "ok"
        assert body["receive_amount"] == 0.0
        assert body["pay_amount"] == 20.0
        assert body["fee"] == 10.0 and body["delivery_fee"] == 10.0

    def test_huge_and_ambiguous_amounts_never_500(self, client, publish):
        publish(pyg=1450.0, usd=5.5)
        huge = client.post("/quotes", json={"currency": "USD", "receive_amount": 1e30})
        overflow = client.post("/quotes", json={"currency": "PYG", "pay_amount": 1e308})
        dotted = client.post("/quotes", json={"currency": "PYG", "pay_amount": "100.50"})

        assert huge.status_code == 200 and huge.json()["status"] == "ok"
        assert huge.json()["receive_amount"] == 1e30
        for resp in (overflow, dotted):
            assert resp.status_code == 200
            assert resp.json()["status"] == "declined"
            assert resp.json()["reason"] == "invalid_input"

    def test_rejects_unknown_currency_and_delivery(self, client):
        assert client.post("/quotes", json={"currency": "EUR", "pay_amount": 1}).status_code == 422
        assert (
            client.post("/quotes", json={"delivery": "moon", "pay_amount": 1}).status_code
            == 422
        )

    def test_converge_mode(self, tmp_path):
        settings = Settings(
            data_dir=tmp_path,
            db_path=tmp_path / "c.db",
            admin_password=ADMIN_PASSWORD,
            fee_refinement="converge",
        )
        client = TestClient(create_app(settings_override=settings))
        client.post("/rates", json={"password": ADMIN_PASSWORD, "usd": 5.0})
        body = client.post("/quotes", json={"currency": "USD", "receive_amount": 400}).json()
        assert body["pay_amount"] == 2030.46

    def test_storage_failure_is_a_generic_500(self, client, tmp_path):
        client.app.state.settings.db_path = tmp_path  # a directory
        resp = client.post("/quotes", json={"currency": "PYG", "pay_amount": 100})
        assert resp.status_code == 500
        assert resp.json()["error"] == "persistence_error"


def test_delivery_options(client):
    options = client.get("/delivery-options").json()
    assert [o["id"] for o in options] == ["franco", "lago", "km4", "km7"]
    assert options[-1]["fee"] == 10.0

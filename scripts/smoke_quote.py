"""Smoke script for the quote API.

Sequence:
 1. Quote before any rate is published (expects rate_unavailable).
 2. Publish PYG and USD rates.
 3. Pay-driven guaraní quote and receive-driven dollar quote.
 4. Ambiguous and invalid inputs (expects declined).
"""

from cambio.main import create_app
from cambio.core.config import Settings
from fastapi.testclient import TestClient
import tempfile
import os
import json


def run():
    with tempfile.TemporaryDirectory() as d:
        settings = Settings(
            data_dir=d, db_path=os.path.join(d, "smoke.db"), admin_password="smoke"
        )
        client = TestClient(create_app(settings_override=settings))

        results = {}
        results["no_rate"] = client.post(
            "/quotes", json={"currency": "PYG", "pay_amount": "100,00"}
        ).json()
        results["publish"] = client.post(
            "/rates", json={"password": "smoke", "pyg": 1450, "usd": 5.5}
        ).json()
        results["pyg_pay"] = client.post(
            "/quotes", json={"currency": "PYG", "pay_amount": "100,00"}
        ).json()
        results["usd_receive"] = client.post(
            "/quotes",
            json={"currency": "USD", "receive_amount": 37, "delivery": "km7"},
        ).json()
        results["both_sides"] = client.post(
            "/quotes",
            json={"currency": "PYG", "pay_amount": 100, "receive_amount": 150000},
        ).json()
        results["zero"] = client.post(
            "/quotes", json={"currency": "USD", "pay_amount": "0,00"}
        ).json()
        print(json.dumps(results, indent=2, ensure_ascii=False))


if __name__ == "__main__":
    run()

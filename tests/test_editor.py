"""Configuration editor routes"""

import asyncio
import json
import threading

import pytest
from fastapi.testclient import TestClient

from atip_submitter.editor.server import create_app
from atip_submitter.editor.templates import render_config_page


class BlockingRunner:
    """Records each start and then waits until released"""

    def __init__(self):
        self.calls = []
        self.started = threading.Event()

    async def __call__(self, mode, headless):
        self.calls.append((mode, headless))
        self.started.set()
        await asyncio.Event().wait()


@pytest.fixture()
def config_path(tmp_path):
    return str(tmp_path / "form_data.json")


def test_get_renders_current_configuration(config_path):
    with open(config_path, "w", encoding="utf-8") as f:
        json.dump({"url": "https://open.canada.ca/en/search/ati", "given_name": "Zoë"}, f)

    with TestClient(create_app(config_path=config_path)) as client:
        response = client.get("/")

    assert response.status_code == 200
    assert 'value="https://open.canada.ca/en/search/ati"' in response.text
    assert 'value="Zoë"' in response.text


def test_get_without_configuration_uses_defaults(config_path):
    with TestClient(create_app(config_path=config_path)) as client:
        response = client.get("/")

    assert response.status_code == 200
    assert 'value="Canada"' in response.text


def test_save_persists_known_fields(config_path):
    form = {
        "url": "https://open.canada.ca/en/search/ati?x=1",
        "given_name": "Ada",
        "delivery_method": "Paper Copy",
        "countdown_seconds": "",
        "not_a_field": "ignored",
    }

    with TestClient(create_app(config_path=config_path)) as client:
        response = client.post("/save", data=form)

    assert response.status_code == 200
    assert "Configuration Saved Successfully" in response.text
    with open(config_path, encoding="utf-8") as f:
        saved = json.load(f)
    assert saved == {
        "url": "https://open.canada.ca/en/search/ati?x=1",
        "given_name": "Ada",
        "delivery_method": "Paper Copy",
    }


def test_save_rejects_invalid_configuration(config_path):
    with TestClient(create_app(config_path=config_path)) as client:
        response = client.post("/save", data={"url": "http://insecure.example"})

    assert response.status_code == 400
    assert "https://" in response.text
    with pytest.raises(FileNotFoundError):
        open(config_path)


def test_start_launches_one_run_at_a_time(config_path):
    runner = BlockingRunner()

    with TestClient(create_app(config_path=config_path, on_start=runner)) as client:
        first = client.post("/start", json={"mode": "live", "headless": True})
        assert runner.started.wait(2)
        second = client.post("/start", json={"mode": "test"})

    assert first.status_code == 202
    assert first.json() == {"status": "started", "mode": "live", "headless": True}
    assert second.status_code == 409
    assert runner.calls == [("live", True)]


def test_start_rejects_unknown_mode(config_path):
    with TestClient(create_app(config_path=config_path, on_start=BlockingRunner())) as client:
        response = client.post("/start", json={"mode": "production"})

    assert response.status_code == 422


def test_rendered_values_are_escaped():
    page = render_config_page({"url": "https://x.ca", "given_name": '"><script>'})

    assert '"><script>' not in page
    assert "&quot;&gt;&lt;script&gt;" in page

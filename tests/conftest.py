import pytest

import atip_submitter.config as config
from atip_submitter.interaction import decision_gate
from atip_submitter.utils import logging as run_log

NO_DELAY = {
    "page_delay_min": 0,
    "page_delay_max": 0,
    "item_delay_min": 0,
    "item_delay_max": 0,
}


@pytest.fixture(autouse=True)
def isolated_run(tmp_path, monkeypatch):
    """Every test runs in its own directory with pacing switched off"""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(config, "TIMING", NO_DELAY)
    monkeypatch.setattr(run_log, "_run_log_path", str(tmp_path / "latest.log"))
    monkeypatch.setattr(decision_gate, "_GRACE_SECONDS", 0)
    return tmp_path


@pytest.fixture()
def form_data():
    return {
        "url": "https://open.canada.ca/en/search/ati?search_api_fulltext=test",
        "requestor_category": "Member of the Public",
        "delivery_method": "Electronic Copy",
        "given_name": "Playwright",
        "family_name": "Tester",
        "email": "test@example.com",
        "phone": "555-0123",
        "address": "123 Test Lane",
        "address_2": "",
        "city": "Testville",
        "state_province": "Ontario",
        "postal_code": "K1A 0A9",
        "country": "Canada",
        "preferred_language": "English",
        "consent": "Yes",
        "additional_comments": "Functional Test Comment",
    }


@pytest.fixture()
def select_options():
    """Visible option labels for every SELECT field on the fake form"""
    return {
        "#edit-requestor-category": ["Member of the Public", "Media", "Academia"],
        "#edit-delivery-method": ["Electronic Copy", "Paper Copy"],
        "#edit-address-fieldset-state-province-select": ["Ontario", "Quebec"],
        "#edit-address-fieldset-country": ["Canada", "United States"],
        "#edit-preferred-language-of-correspondence": ["English", "French"],
        "#edit-consent": ["Yes", "No"],
    }

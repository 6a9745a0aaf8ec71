"""Pipeline orchestration: preconditions, dedup, stats, top-level safety"""

import asyncio
import functools
import json
import os
import signal
import sys

import pytest

import atip_submitter.main as main_module
from atip_submitter.data.form_data import ConfigError
from atip_submitter.data.results import SUBMITTED
from atip_submitter.main import build_parser, filter_new_links, run_pipeline, run_pipeline_safely
from atip_submitter.submitter import run_batch
from fakes import FakeBrowser, FakeFormPage, FakePlaywright

REF = "https://open.canada.ca/en/search/ati/reference/"
SEVEN = [f"{REF}{i}" for i in range(1, 8)]


class RecordingCrawler:
    def __init__(self, links):
        self.links = links
        self.calls = []

    async def __call__(self, seed_url, **kwargs):
        self.calls.append(seed_url)
        return list(self.links)


class RecordingSubmitter:
    def __init__(self):
        self.calls = []

    async def __call__(self, form_data, links, **kwargs):
        self.calls.append((list(links), kwargs))
        return "ledger"


@pytest.fixture()
def config_path(tmp_path, form_data):
    path = tmp_path / "form_data.json"
    path.write_text(json.dumps(form_data))
    return str(path)


def _pipeline(config_path, crawl, submit, **kwargs):
    kwargs.setdefault("log_path", "urls.csv")
    kwargs.setdefault("scraped_path", "scraped_results.csv")
    return asyncio.run(
        run_pipeline(config_path=config_path, crawl=crawl, submit=submit, **kwargs)
    )


def test_missing_url_aborts_before_any_browser_work(tmp_path):
    path = tmp_path / "form_data.json"
    path.write_text(json.dumps({"given_name": "A"}))
    crawl, submit = RecordingCrawler(SEVEN), RecordingSubmitter()

    with pytest.raises(ConfigError):
        _pipeline(str(path), crawl, submit)

    assert crawl.calls == []
    assert submit.calls == []


def test_seven_new_links_are_all_submitted(config_path, form_data, capsys):
    crawl, submit = RecordingCrawler(SEVEN), RecordingSubmitter()

    result = _pipeline(config_path, crawl, submit, mode="live")

    assert result == "ledger"
    assert crawl.calls == [form_data["url"]]
    links, kwargs = submit.calls[0]
    assert links == SEVEN
    assert kwargs["dry_run"] is False
    assert (
        "7 total links, 0 previously submitted, 7 new to process"
        in capsys.readouterr().out
    )
    with open("scraped_results.csv", encoding="utf-8") as f:
        assert f.read().split("\n") == SEVEN


def test_previously_submitted_links_are_filtered(config_path):
    with open("urls.csv", "w", encoding="utf-8") as f:
        f.write(f"{SEVEN[0]}\n{SEVEN[3]},2024-05-01\n")
    crawl, submit = RecordingCrawler(SEVEN), RecordingSubmitter()

    _pipeline(config_path, crawl, submit)

    links, kwargs = submit.calls[0]
    assert links == [SEVEN[i] for i in (1, 2, 4, 5, 6)]
    assert kwargs["dry_run"] is True


def test_nothing_new_is_a_successful_no_op(config_path, capsys):
    with open("urls.csv", "w", encoding="utf-8") as f:
        f.write("\n".join(SEVEN))
    crawl, submit = RecordingCrawler(SEVEN), RecordingSubmitter()

    ledger = _pipeline(config_path, crawl, submit)

    assert len(ledger) == 0
    assert submit.calls == []
    assert "No new links found" in capsys.readouterr().out


def test_second_live_run_submits_nothing(config_path, select_options):
    """crawled - log is submitted once; the next run finds everything logged"""
    browser = FakeBrowser(page_factory=lambda: FakeFormPage(select_options=select_options))
    submit = functools.partial(run_batch, playwright=FakePlaywright(browser))
    crawl = RecordingCrawler(SEVEN)

    first = _pipeline(config_path, crawl, submit, mode="live", headless=True, interactive=False)
    second = _pipeline(config_path, crawl, submit, mode="live", headless=True, interactive=False)

    assert [r.status for r in first] == [SUBMITTED] * 7
    assert len(second) == 0
    assert len(browser.contexts) == 1
    assert len(browser.contexts[0].pages) == 7


def test_dry_run_leaves_the_log_untouched(config_path, select_options):
    browser = FakeBrowser(page_factory=lambda: FakeFormPage(select_options=select_options))
    submit = functools.partial(run_batch, playwright=FakePlaywright(browser))

    ledger = _pipeline(
        config_path, RecordingCrawler(SEVEN), submit, mode="test", headless=True, interactive=False
    )

    assert len(ledger) == 7
    with open("urls.csv", encoding="utf-8") as f:
        assert f.read() == ""
    assert all(page.submit_clicks == 0 for page in browser.contexts[0].pages)


def test_unknown_mode_is_rejected(config_path):
    with pytest.raises(ValueError, match="mode"):
        _pipeline(config_path, RecordingCrawler(SEVEN), RecordingSubmitter(), mode="prod")


def test_safe_runner_logs_and_returns_none(tmp_path, capsys):
    crawl = RecordingCrawler(SEVEN)

    result = asyncio.run(
        run_pipeline_safely(
            config_path=str(tmp_path / "absent.json"),
            crawl=crawl,
            submit=RecordingSubmitter(),
        )
    )

    assert result is None
    assert crawl.calls == []
    out = capsys.readouterr().out
    assert "FATAL ERROR" in out
    assert "ConfigError" in out
    with open("latest.log", encoding="utf-8") as f:
        assert "[ERROR]" in f.read()


def test_safe_runner_swallows_stage_failures(config_path):
    async def broken_crawl(seed_url, **kwargs):
        raise RuntimeError("browser vanished")

    result = asyncio.run(
        run_pipeline_safely(
            config_path=config_path, crawl=broken_crawl, submit=RecordingSubmitter()
        )
    )

    assert result is None


def test_filter_keeps_crawl_order():
    assert filter_new_links(["c", "a", "b"], {"a"}) == ["c", "b"]


def test_cli_defaults_to_test_mode():
    args = build_parser().parse_args([])

    assert args.mode == "test"
    assert args.headless is False
    assert args.max_pages == 100


@pytest.mark.skipif(sys.platform == "win32", reason="needs loop signal handlers")
def test_sigint_closes_tracked_browsers_and_exits_130(config_path, monkeypatch):
    browser = FakeBrowser()

    async def interrupted_pipeline(registry=None, **kwargs):
        registry.register(browser)
        os.kill(os.getpid(), signal.SIGINT)
        await asyncio.sleep(30)

    monkeypatch.setattr(main_module, "run_pipeline", interrupted_pipeline)
    args = build_parser().parse_args(["--config", config_path])

    code = asyncio.run(main_module.run_cli_pipeline(args))

    assert code == 130
    assert browser.close_calls == 1

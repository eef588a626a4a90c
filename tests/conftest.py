# File: tests/conftest.py
from pathlib import Path
from typing import Callable

import pytest

from asset_scout.config import CrawlConfig
from asset_scout.logger import configure


@pytest.fixture(autouse=True)
def reset_logging():
    """
    CliRunner swaps sys.stderr while the CLI reconfigures the project logger;
    point the handlers back at the real stream after every test.
    """
    yield
    configure(level="DEBUG")


@pytest.fixture()
def make_config(tmp_path: Path) -> Callable[..., CrawlConfig]:
    """
    Factory for a CrawlConfig writing its output files under tmp_path.
    Retries are off and timeouts short so failing pages fail fast.
    """

    def _make(seed_url: str, **overrides) -> CrawlConfig:
        values = {
            "seed_url": seed_url,
            "allowed_hosts": ["localhost"],
            "concurrency": 4,
            "timeout": 2.0,
            "user_agent": "TestAgent/1.0",
            "retry_times": 0,
            "retry_backoff": 0.0,
            "assets_file": tmp_path / "pdf_urls.txt",
            "ledger_file": tmp_path / "visited_urls.json",
        }
        values.update(overrides)
        return CrawlConfig(**values)

    return _make


@pytest.fixture()
def sample_html() -> str:
    """Page from the example.org scenario: one PDF, one off-site link."""
    return (
        '<html><body>'
        '<a href="/report.pdf">Report</a>'
        '<a href="https://other.org/x">Elsewhere</a>'
        '</body></html>'
    )

# tests/conftest.py
"""Shared test fixtures and configuration."""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List
from unittest.mock import AsyncMock, Mock

import pytest

from finformatter.core.catalog import RuleCatalog
from finformatter.core.config import Config, ProviderConfig
from finformatter.core.paper import AnalysisResult, Journal, JournalRules


@pytest.fixture(autouse=True)
def reset_root_logging():
    """CLI tests install handlers on streams that are closed afterwards."""
    yield
    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)


@pytest.fixture
def test_config(tmp_path: Path) -> Config:
    """Test configuration with temporary paths and no real credentials."""
    return Config(
        glm_api_key="glm-test-key",
        glm_enabled=True,
        deepseek_api_key="deepseek-test-key",
        deepseek_enabled=True,
        google_api_key="",
        gemini_enabled=False,
        provider_order=["glm", "deepseek", "gemini"],
        settings_file=tmp_path / "settings.yaml",
        output_dir=tmp_path / "out",
        log_dir=None,
    )


@pytest.fixture
def catalog() -> RuleCatalog:
    return RuleCatalog()


@pytest.fixture
def sample_journal(catalog: RuleCatalog) -> Journal:
    """American Economic Review: three-line tables, italic variables."""
    return catalog.get("aer")


@pytest.fixture
def grid_journal() -> Journal:
    """Journal that wants bordered tables and no variable italics."""
    return Journal(
        id="grid",
        name="Grid Review",
        rules=JournalRules(
            title_limit=20,
            abstract_limit=200,
            heading_sequence=["1.", "1.1."],
            font="Arial",
            citation="Harvard",
            use_three_line_table=False,
            variable_italic=False,
        ),
    )


@pytest.fixture
def provider_configs() -> List[ProviderConfig]:
    """Three active providers in fallback order."""
    return [
        ProviderConfig(provider="glm", model_name="glm-4-flash", api_key="k-glm"),
        ProviderConfig(provider="deepseek", model_name="deepseek-chat", api_key="k-ds"),
        ProviderConfig(provider="gemini", model_name="gemini-1.5-flash", api_key="k-gem"),
    ]


@pytest.fixture
def sample_payload() -> Dict[str, Any]:
    """Provider payload in the wire shape the models are asked for."""
    return {
        "metadata": {
            "title": "Monetary Policy Shocks and Bank Lending",
            "authors": ["Jane Doe", "Wei Zhang"],
            "abstract": "We study the bank lending channel.",
            "keywords": "monetary policy; bank lending",
            "jelCodes": "E52, G21",
        },
        "statusReport": {
            "titleCount": 6,
            "abstractCount": 6,
            "majorChanges": ["Renumbered headings", "Converted Table 1 to three-line layout"],
            "isCompliant": False,
            "complianceSummary": "Abstract within limit; JEL codes present.",
        },
        "segments": [
            {"type": "title", "content": "Monetary Policy Shocks and Bank Lending"},
            {"type": "author", "content": "Jane Doe; Wei Zhang"},
            {"type": "abstract", "content": "We study the bank lending channel."},
            {"type": "heading_l1", "content": "I. Introduction"},
            {"type": "body", "content": "The coefficient <i>β</i> is positive."},
            {
                "type": "table",
                "caption": "Table 1: Summary statistics",
                "data": [["Variable", "Mean", "SD"], ["<i>R2</i>", "0.41", "0.12"]],
                "source": "Authors' calculations",
            },
            {"type": "references", "content": ["Bernanke, B. (1995).", "Kashyap, A. (2000)."]},
        ],
        "audit_alerts": ["Citation styles are mixed (author-year and numeric)."],
        "titleSuggestions": ["Bank Lending after Policy Shocks"],
    }


@pytest.fixture
def sample_raw(sample_payload: Dict[str, Any]) -> str:
    """Raw provider text wrapped in a Markdown fence."""
    return "```json\n" + json.dumps(sample_payload, ensure_ascii=False) + "\n```"


@pytest.fixture
def sample_result(sample_payload: Dict[str, Any]) -> AnalysisResult:
    return AnalysisResult.model_validate(sample_payload)


@pytest.fixture
def client_factory():
    """Factory of fake provider clients, keyed by provider tag.

    Each entry of ``outcomes`` is either raw text returned by ``send`` or an
    exception raised from it.
    """

    def build(outcomes: Dict[str, Any]) -> Mock:
        clients: Dict[str, Mock] = {}

        def create(config: ProviderConfig, timeout: float) -> Mock:
            outcome = outcomes[config.provider]
            client = Mock()
            if isinstance(outcome, BaseException):
                client.send = AsyncMock(side_effect=outcome)
            else:
                client.send = AsyncMock(return_value=outcome)
            clients[config.provider] = client
            return client

        factory = Mock(side_effect=create)
        factory.clients = clients
        return factory

    return build

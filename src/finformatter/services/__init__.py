"""Application services."""

from finformatter.services.analysis_service import PaperAnalysisService
from finformatter.services.config_loader import (
    load_journal_catalog,
    load_journals,
    load_yaml,
    save_yaml,
)
from finformatter.services.config_store import ConfigStore, SettingsFileStore, StaticConfigStore
from finformatter.services.docx_exporter import DocxExporter
from finformatter.services.document_reader import read_paper_text

__all__ = [
    "ConfigStore",
    "DocxExporter",
    "PaperAnalysisService",
    "SettingsFileStore",
    "StaticConfigStore",
    "load_journal_catalog",
    "load_journals",
    "load_yaml",
    "save_yaml",
    "read_paper_text",
]

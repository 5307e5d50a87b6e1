"""FinFormatter - AI-assisted journal formatting for finance and economics papers."""

from finformatter.__version__ import __version__

__all__ = ["__version__"]

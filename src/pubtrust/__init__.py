"""pubtrust - verified publisher scoring for open-source contributors."""

__version__ = "0.1.0"

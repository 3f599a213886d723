"""coverscout — cover-song relationships scraped from WhoSampled."""

__version__ = "0.1.0"

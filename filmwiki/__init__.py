"""Find the Wikipedia article for a film or TV title and extract it into sections."""

__version__ = "0.1.0"

"""labledger: lab equipment lending records and spreadsheet reports."""

__version__ = "0.1.0"

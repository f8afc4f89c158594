"""cvreflow: PDF CV ➜ structured data ➜ freshly laid-out PDF."""

__version__ = "0.1.0"

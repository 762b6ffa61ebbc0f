"""Catalog Hub - aggregated dataset, repository and model catalogs for the marketplace."""

__version__ = "0.1.0"

"""Adaptadores do catálogo de serviços."""

from app.infra.catalog.http_catalog import HttpServiceCatalog

__all__ = ["HttpServiceCatalog"]

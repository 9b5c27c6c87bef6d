"""Contrato do catálogo de serviços (somente leitura para o agendamento)."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from app.domain.service import Service


@runtime_checkable
class ServiceCatalogProtocol(Protocol):
    """Fonte da configuração de serviços mantida pelo negócio."""

    async def get_service(self, service_id: str) -> Service | None:
        """Retorna o serviço ou None se não existir."""
        ...

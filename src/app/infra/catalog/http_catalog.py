"""Catálogo de serviços lido do módulo de negócios via HTTP.

GET `{base_url}/services/{service_id}` devolve o serviço no formato de
`Service` (dias aceitam nome ou índice 0-6 com domingo = 0).
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pydantic import ValidationError as PydanticValidationError

from app.domain.service import Service
from app.infra.http import HttpError
from utils.errors import StorageUnavailableError

if TYPE_CHECKING:
    from app.infra.http import HttpClient

logger = logging.getLogger(__name__)


class HttpServiceCatalog:
    def __init__(self, *, base_url: str, http_client: HttpClient) -> None:
        self._base_url = base_url.rstrip("/")
        self._http = http_client

    async def get_service(self, service_id: str) -> Service | None:
        try:
            response = await self._http.get(f"{self._base_url}/services/{service_id}")
        except HttpError as exc:
            logger.warning(
                "service_catalog_unavailable",
                extra={"service_id": service_id, "status_code": exc.status_code},
            )
            raise StorageUnavailableError("Catálogo de serviços indisponível") from exc
        if response is None:
            return None
        try:
            return Service.model_validate(response.json())
        except PydanticValidationError as exc:
            logger.error("service_catalog_invalid_payload", extra={"service_id": service_id})
            raise StorageUnavailableError("Resposta inválida do catálogo de serviços") from exc

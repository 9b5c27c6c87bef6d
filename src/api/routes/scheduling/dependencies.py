"""Acesso ao container de agendamento montado no lifespan."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request

from app.bootstrap.dependencies import SchedulingContainer
from utils.errors import StorageUnavailableError


def get_container(request: Request) -> SchedulingContainer:
    container = getattr(request.app.state, "container", None)
    if container is None:
        raise StorageUnavailableError("Serviço de agenda não inicializado")
    return container


Container = Annotated[SchedulingContainer, Depends(get_container)]

"""Rotas HTTP da API: adapters de entrada.

Responsabilidades:
- Definir endpoints HTTP (agenda, health)
- Validação inicial de request (path, query, body)
- Delegação para coordinators/use_cases
- Tradução de erros de agenda para respostas HTTP

Estrutura:
- routes/scheduling/: slots, agendamentos, séries e callbacks de pagamento
- routes/health/: health checks e readiness
- errors.py: exception handlers

Agregação:
- router.py: registra todos os routers no app principal
"""

from __future__ import annotations

from api.routes.errors import register_exception_handlers
from api.routes.router import create_api_router

__all__ = ["create_api_router", "register_exception_handlers"]

"""API: camada de borda HTTP.

Responsabilidades:
- Receber requests HTTP e validar payloads (pydantic)
- Delegar para coordinators e use cases do app
- Traduzir erros de domínio em respostas HTTP estáveis

Subpastas:
- routes/: endpoints HTTP (agenda, health)

NÃO PODE conter: regras de agenda, FSM, acesso direto a stores.
"""

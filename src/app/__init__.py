"""App: coração do sistema: orquestração, casos de uso e infraestrutura.

Subpastas:
- bootstrap/: composition root (factories, inicialização, wiring)
- coordinators/: fluxos de reserva e de séries recorrentes
- use_cases/: casos de uso expostos pela API
- services/: cálculos puros (slots, datas de recorrência)
- domain/: entidades imutáveis (serviço, agendamento, série)
- infra/: implementações concretas de IO (stores, locks, HTTP)
- protocols/: contratos/interfaces
- observability/: correlation_id e métricas via logs

Padrão: app executa; api adapta; fsm governa; utils apoia.
"""

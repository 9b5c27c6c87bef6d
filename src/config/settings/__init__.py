"""Agregador de settings do agenda-marketplace.

Re-exporta todas as settings e funções de cada módulo.
Organização por domínio para isolamento de mudanças.
"""

from __future__ import annotations

# Base settings
from config.settings.base import (
    BaseSettings,
    Environment,
    get_base_settings,
)

# Integrações externas
from config.settings.integrations import (
    IntegrationSettings,
    get_integration_settings,
)

# Agenda
from config.settings.scheduling import (
    LockBackend,
    SchedulingSettings,
    get_scheduling_settings,
)

__all__ = [
    "BaseSettings",
    "Environment",
    "IntegrationSettings",
    "LockBackend",
    "SchedulingSettings",
    "get_base_settings",
    "get_integration_settings",
    "get_scheduling_settings",
]

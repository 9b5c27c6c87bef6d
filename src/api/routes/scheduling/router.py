"""Router de agendamento: agrega slots, reservas, séries e pagamentos."""

from __future__ import annotations

from fastapi import APIRouter

from api.routes.scheduling.appointments import router as appointments_router
from api.routes.scheduling.payments import router as payments_router
from api.routes.scheduling.recurring import router as recurring_router
from api.routes.scheduling.slots import router as slots_router

router = APIRouter()

router.include_router(slots_router)
router.include_router(appointments_router)
router.include_router(recurring_router)
router.include_router(payments_router)

"""
Testes da máquina de estados de agendamento.

Cobre tabela de transições, papéis autorizados, guard de horário de
término e a cópia imutável produzida a cada transição.
"""

from datetime import date, datetime, time
from decimal import Decimal

import pytest

from app.domain.appointment import Appointment
from fsm import (
    ACTIVE_STATUSES,
    TERMINAL_STATUSES,
    VALID_TRANSITIONS,
    ActorRole,
    AppointmentStateMachine,
    AppointmentStatus,
    TransitionContext,
    create_fsm,
    evaluate_guards,
    get_allowed_actors,
    initial_status_for,
    is_terminal,
    is_transition_valid,
    validate_transition_map,
)

CREATED_AT = datetime(2024, 1, 1, 8, 0)


def _appointment(status: AppointmentStatus = AppointmentStatus.PENDING) -> Appointment:
    return Appointment(
        id="appt-1",
        service_id="svc-1",
        business_id="biz-1",
        customer_id="cus-1",
        date=date(2024, 1, 3),
        start_time=time(10, 0),
        end_time=time(11, 0),
        status=status,
        created_at=CREATED_AT,
        updated_at=CREATED_AT,
    )


def _ctx(actor: ActorRole, now: datetime = datetime(2024, 1, 2, 9, 0)) -> TransitionContext:
    return TransitionContext(actor=actor, now=now)


class TestStatusesAndTable:
    def test_terminal_and_active_statuses_partition_the_enum(self) -> None:
        assert TERMINAL_STATUSES | ACTIVE_STATUSES == set(AppointmentStatus)
        assert not TERMINAL_STATUSES & ACTIVE_STATUSES
        for status in TERMINAL_STATUSES:
            assert is_terminal(status) is True
            assert VALID_TRANSITIONS[status] == frozenset()

    def test_transition_map_is_consistent(self) -> None:
        assert validate_transition_map() == []

    @pytest.mark.parametrize(
        ("from_state", "to_state", "expected"),
        [
            (AppointmentStatus.PENDING, AppointmentStatus.CONFIRMED, True),
            (AppointmentStatus.PENDING, AppointmentStatus.CANCELLED, True),
            (AppointmentStatus.CONFIRMED, AppointmentStatus.COMPLETED, True),
            (AppointmentStatus.CONFIRMED, AppointmentStatus.NO_SHOW, True),
            (AppointmentStatus.CONFIRMED, AppointmentStatus.CANCELLED, True),
            (AppointmentStatus.PENDING, AppointmentStatus.COMPLETED, False),
            (AppointmentStatus.PENDING, AppointmentStatus.NO_SHOW, False),
            (AppointmentStatus.CANCELLED, AppointmentStatus.CONFIRMED, False),
            (AppointmentStatus.COMPLETED, AppointmentStatus.CANCELLED, False),
        ],
    )
    def test_transition_table(
        self,
        from_state: AppointmentStatus,
        to_state: AppointmentStatus,
        expected: bool,
    ) -> None:
        assert is_transition_valid(from_state, to_state) is expected

    def test_allowed_actors_per_edge(self) -> None:
        assert get_allowed_actors(AppointmentStatus.PENDING, AppointmentStatus.CONFIRMED) == {
            ActorRole.BUSINESS,
            ActorRole.PAYMENT,
        }
        assert ActorRole.CUSTOMER in get_allowed_actors(
            AppointmentStatus.CONFIRMED, AppointmentStatus.CANCELLED
        )
        assert get_allowed_actors(AppointmentStatus.CONFIRMED, AppointmentStatus.NO_SHOW) == {
            ActorRole.BUSINESS
        }

    def test_initial_status_depends_on_price(self) -> None:
        assert initial_status_for(Decimal("50.00")) == AppointmentStatus.PENDING
        assert initial_status_for(Decimal("0")) == AppointmentStatus.CONFIRMED


class TestStateMachine:
    def test_payment_confirms_pending_and_returns_updated_copy(self) -> None:
        original = _appointment()
        machine = create_fsm(original)
        now = datetime(2024, 1, 2, 9, 0)

        result = machine.transition(AppointmentStatus.CONFIRMED, "payment_confirmed", _ctx(ActorRole.PAYMENT, now))

        assert result.success is True
        assert result.transition is not None
        assert result.transition.actor == ActorRole.PAYMENT
        assert machine.current_state == AppointmentStatus.CONFIRMED
        assert machine.appointment.updated_at == now
        # Registro original é imutável
        assert original.status == AppointmentStatus.PENDING
        assert len(machine.history) == 1

    def test_customer_cannot_confirm(self) -> None:
        machine = AppointmentStateMachine(_appointment())

        result = machine.transition(AppointmentStatus.CONFIRMED, "customer_request", _ctx(ActorRole.CUSTOMER))

        assert result.success is False
        assert "customer" in (result.error_reason or "")
        assert machine.current_state == AppointmentStatus.PENDING
        assert machine.history == []

    def test_completion_requires_end_time_passed(self) -> None:
        machine = create_fsm(_appointment(AppointmentStatus.CONFIRMED))
        before_end = datetime(2024, 1, 3, 10, 59)
        at_end = datetime(2024, 1, 3, 11, 0)

        denied = machine.transition(AppointmentStatus.COMPLETED, "business_request", _ctx(ActorRole.BUSINESS, before_end))
        assert denied.success is False
        assert machine.can_transition_to(AppointmentStatus.NO_SHOW, _ctx(ActorRole.BUSINESS, before_end)) is False

        allowed = machine.transition(AppointmentStatus.COMPLETED, "business_request", _ctx(ActorRole.BUSINESS, at_end))
        assert allowed.success is True
        assert machine.is_terminal is True

    def test_terminal_state_rejects_everything(self) -> None:
        machine = create_fsm(_appointment(AppointmentStatus.CANCELLED))

        for target in AppointmentStatus:
            result = machine.transition(target, "business_request", _ctx(ActorRole.BUSINESS))
            assert result.success is False
        assert machine.get_valid_targets() == frozenset()

    def test_system_actor_cancels_confirmed(self) -> None:
        machine = create_fsm(_appointment(AppointmentStatus.CONFIRMED))

        result = machine.transition(AppointmentStatus.CANCELLED, "series_cancelled", _ctx(ActorRole.SYSTEM))

        assert result.success is True
        summary = machine.get_state_summary()
        assert summary["current_state"] == "cancelled"
        assert summary["transition_count"] == 1

    def test_evaluate_guards_without_end_time_denies_no_show(self) -> None:
        result = evaluate_guards(
            AppointmentStatus.CONFIRMED,
            AppointmentStatus.NO_SHOW,
            _ctx(ActorRole.BUSINESS),
        )
        assert result.allowed is False

    def test_empty_trigger_is_rejected(self) -> None:
        machine = create_fsm(_appointment())
        with pytest.raises(ValueError, match="trigger"):
            machine.transition(AppointmentStatus.CONFIRMED, " ", _ctx(ActorRole.BUSINESS))

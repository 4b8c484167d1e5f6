"""Tests for StepMachine."""
import pytest

from hive_steps import StepMachine


class TestStepMachine:
    """Test cases for dispatch, chaining and self-healing."""

    def test_handler_result_is_next_step(self):
        machine = StepMachine("idle")
        machine.register("idle", lambda log: "work")
        machine.register("work", lambda log: "work")
        assert machine.advance("idle", []) == "work"

    def test_unknown_step_resets_without_running(self):
        calls = []
        machine = StepMachine("idle")
        machine.register("idle", lambda log: log.append("idle") or "idle")
        assert machine.advance("corrupted", calls) == "idle"
        assert machine.advance(None, calls) == "idle"
        assert calls == []

    def test_unknown_result_resets_to_initial(self):
        machine = StepMachine("idle")
        machine.register("idle", lambda: "idle")
        machine.register("work", lambda: "nowhere")
        assert machine.advance("work") == "idle"

    def test_chained_step_runs_next_handler_same_call(self):
        calls = []
        machine = StepMachine("move")
        machine.register("move", lambda log: log.append("move") or "work", chain=True)
        machine.register("work", lambda log: log.append("work") or "work")
        assert machine.advance("move", calls) == "work"
        assert calls == ["move", "work"]

    def test_unchained_step_stops_after_transition(self):
        calls = []
        machine = StepMachine("work")
        machine.register("work", lambda log: log.append("work") or "move")
        machine.register("move", lambda log: log.append("move") or "move")
        assert machine.advance("work", calls) == "move"
        assert calls == ["work"]

    def test_chain_is_bounded(self):
        calls = []
        machine = StepMachine("a", max_chain=2)
        machine.register("a", lambda log: log.append("a") or "b", chain=True)
        machine.register("b", lambda log: log.append("b") or "a", chain=True)
        assert machine.advance("a", calls) == "b"
        assert calls == ["a", "b", "a"]

    def test_reregister_can_drop_chain(self):
        machine = StepMachine("a")
        machine.register("a", lambda: "b", chain=True)
        machine.register("a", lambda: "b")
        machine.register("b", lambda: pytest.fail("b must not run"))
        assert machine.advance("a") == "b"

    def test_negative_chain_rejected(self):
        with pytest.raises(ValueError):
            StepMachine("a", max_chain=-1)

    def test_steps_lists_registered(self):
        machine = StepMachine("a")
        machine.register("a", lambda: "a")
        machine.register("b", lambda: "b")
        assert machine.steps() == ["a", "b"]
        assert machine.has("a") and not machine.has("c")

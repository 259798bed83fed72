"""
Tests for StepRunner: profile filtering, resume, dry-run, force and abort.
"""

import pytest

from conftest import RecordingRollback, by_id, scripted_input
from fedora_setup.errors import StepFatalError
from fedora_setup.pipeline import RunStatus, StepOutcome, StepResult

MINIMAL = ["setup_dnf", "setup_fonts", "setup_shell"]


class TestProfileFiltering:
    def test_steps_outside_profile_never_run(self, make_ctx, make_harness, fake_catalogue):
        h = make_harness(make_ctx("minimal"), fake_catalogue)
        stats = h.runner.run()

        for step in fake_catalogue:
            if step.step_id in MINIMAL:
                assert step.calls == [False]
            else:
                assert step.calls == []
                assert stats.outcomes[step.step_id] is StepOutcome.SKIPPED_BY_PROFILE

    def test_full_profile_runs_every_step_in_order(self, make_ctx, make_harness, fake_catalogue):
        h = make_harness(make_ctx("full"), fake_catalogue)
        stats = h.runner.run()

        assert stats.attempted == [s.step_id for s in fake_catalogue]
        assert stats.total == len(fake_catalogue)
        assert stats.completed == len(fake_catalogue)

    def test_total_fixed_before_loop(self, make_ctx, make_harness, fake_catalogue):
        # Skipped steps still count, so the denominator never drifts.
        by_id(fake_catalogue, "setup_dev").result = StepResult.ISSUES
        h = make_harness(make_ctx("dev"), fake_catalogue, input_fn=scripted_input("n"))
        stats = h.runner.run()

        assert stats.total == 7
        assert stats.completed == 7


class TestScenarios:
    def test_scenario_a_fresh_minimal_run(self, make_ctx, make_harness, fake_catalogue):
        ctx = make_ctx("minimal")
        h = make_harness(ctx, fake_catalogue)
        stats = h.runner.run()

        assert ctx.state_file.read_text(encoding="utf-8").splitlines() == MINIMAL
        assert (stats.completed, stats.total) == (3, 3)
        assert stats.status is RunStatus.FINISHED

    def test_scenario_b_second_run_is_all_already_done(self, make_ctx, make_harness, fake_catalogue):
        ctx = make_ctx("minimal")
        make_harness(ctx, fake_catalogue).runner.run()
        for s in fake_catalogue:
            s.calls.clear()

        stats = make_harness(ctx, fake_catalogue).runner.run()

        assert all(s.calls == [] for s in fake_catalogue)
        assert stats.ids_with(StepOutcome.SKIPPED_ALREADY_DONE) == MINIMAL
        assert (stats.completed, stats.total) == (3, 3)
        assert stats.status is RunStatus.FINISHED

    def test_scenario_c_fatal_error_aborts(self, make_ctx, make_harness, fake_catalogue):
        ctx = make_ctx("full")
        fifth = fake_catalogue[4]
        fifth.result = RuntimeError("boom")
        rollback = RecordingRollback()
        h = make_harness(ctx, fake_catalogue, rollback=rollback)

        with pytest.raises(StepFatalError) as exc:
            h.runner.run()

        assert exc.value.step_id == fifth.step_id
        assert isinstance(exc.value.cause, RuntimeError)
        assert h.state.completed_ids() == [s.step_id for s in fake_catalogue[:4]]
        assert all(s.calls == [] for s in fake_catalogue[5:])

        assert len(rollback.calls) == 1
        stats, error = rollback.calls[0]
        assert stats.status is RunStatus.ABORTED
        assert stats.failed_step == fifth.step_id
        assert stats.outcomes[fifth.step_id] is StepOutcome.FATAL
        assert error is exc.value

    def test_scenario_d_dry_run_leaves_state_untouched(self, make_ctx, make_harness, fake_catalogue):
        ctx = make_ctx("full", dry_run=True)
        h = make_harness(ctx, fake_catalogue, input_fn=scripted_input("n", "n", "n"))
        stats = h.runner.run()

        assert not ctx.state_file.exists()
        assert all(s.calls == [True] for s in fake_catalogue)
        assert len(h.gate.recorded) == len(fake_catalogue)
        assert stats.completed == stats.total == len(fake_catalogue)


class TestDryRunInvariant:
    def test_existing_state_bytes_unchanged(self, make_ctx, make_harness, fake_catalogue):
        ctx = make_ctx("gaming", dry_run=True)
        ctx.state_file.parent.mkdir(parents=True)
        ctx.state_file.write_bytes(b"setup_dnf\nsome_future_step\nsetup_fonts")
        before = ctx.state_file.read_bytes()

        by_id(fake_catalogue, "setup_drivers").result = StepResult.ISSUES
        make_harness(ctx, fake_catalogue).runner.run()

        assert ctx.state_file.read_bytes() == before

    def test_dry_run_with_fatal_step_leaves_state_untouched(self, make_ctx, make_harness, fake_catalogue):
        ctx = make_ctx("minimal", dry_run=True)
        by_id(fake_catalogue, "setup_fonts").result = StepResult.FATAL
        h = make_harness(ctx, fake_catalogue)

        with pytest.raises(StepFatalError):
            h.runner.run()
        assert not ctx.state_file.exists()


class TestForceAndOutcomes:
    def test_force_reruns_completed_steps(self, make_ctx, make_harness, fake_catalogue):
        make_harness(make_ctx("minimal"), fake_catalogue).runner.run()
        for s in fake_catalogue:
            s.calls.clear()

        ctx = make_ctx("minimal", force=True)
        input_fn = scripted_input()
        stats = make_harness(ctx, fake_catalogue, input_fn=input_fn).runner.run()

        assert [s.step_id for s in fake_catalogue if s.calls] == MINIMAL
        assert stats.ids_with(StepOutcome.RAN_OK) == MINIMAL
        assert len(input_fn.prompts) == 3

    def test_force_does_not_clear_declined_steps(self, make_ctx, make_harness, fake_catalogue):
        make_harness(make_ctx("minimal"), fake_catalogue).runner.run()

        ctx = make_ctx("minimal", force=True)
        h = make_harness(ctx, fake_catalogue, input_fn=scripted_input("n", "n", "n"))
        h.runner.run()

        assert h.state.completed_ids() == MINIMAL

    def test_issues_counted_but_not_marked(self, make_ctx, make_harness, fake_catalogue):
        ctx = make_ctx("minimal")
        by_id(fake_catalogue, "setup_fonts").result = StepResult.ISSUES
        h = make_harness(ctx, fake_catalogue)
        stats = h.runner.run()

        assert stats.outcomes["setup_fonts"] is StepOutcome.RAN_WITH_ISSUES
        assert stats.issues == ["setup_fonts"]
        assert stats.completed == 3
        assert not h.state.is_completed("setup_fonts")

        # Retried on the next run without --force.
        by_id(fake_catalogue, "setup_fonts").result = StepResult.OK
        by_id(fake_catalogue, "setup_fonts").calls.clear()
        make_harness(ctx, fake_catalogue).runner.run()
        assert by_id(fake_catalogue, "setup_fonts").calls == [False]

    def test_declined_step_counted_but_not_marked(self, make_ctx, make_harness, fake_catalogue):
        ctx = make_ctx("minimal")
        h = make_harness(ctx, fake_catalogue, input_fn=scripted_input("", "n", ""))
        stats = h.runner.run()

        assert stats.outcomes["setup_fonts"] is StepOutcome.SKIPPED_BY_USER
        assert by_id(fake_catalogue, "setup_fonts").calls == []
        assert stats.completed == 3
        assert h.state.completed_ids() == ["setup_dnf", "setup_shell"]

    def test_boolean_results_are_accepted(self, make_ctx, make_harness, fake_catalogue):
        by_id(fake_catalogue, "setup_dnf").result = True
        by_id(fake_catalogue, "setup_fonts").result = False
        h = make_harness(make_ctx("minimal"), fake_catalogue)
        stats = h.runner.run()

        assert stats.outcomes["setup_dnf"] is StepOutcome.RAN_OK
        assert stats.outcomes["setup_fonts"] is StepOutcome.RAN_WITH_ISSUES

    def test_fatal_result_triggers_rollback(self, make_ctx, make_harness, fake_catalogue):
        by_id(fake_catalogue, "setup_shell").result = StepResult.FATAL
        by_id(fake_catalogue, "setup_shell").services = ("docker",)
        rollback = RecordingRollback()
        h = make_harness(make_ctx("minimal"), fake_catalogue, rollback=rollback)

        with pytest.raises(StepFatalError):
            h.runner.run()
        stats, _ = rollback.calls[0]
        assert stats.services == ["docker"]
        assert h.state.completed_ids() == ["setup_dnf", "setup_fonts"]

    def test_keyboard_interrupt_skips_rollback(self, make_ctx, make_harness, fake_catalogue):
        by_id(fake_catalogue, "setup_fonts").result = KeyboardInterrupt()
        rollback = RecordingRollback()
        h = make_harness(make_ctx("minimal"), fake_catalogue, rollback=rollback)

        with pytest.raises(KeyboardInterrupt):
            h.runner.run()
        assert rollback.calls == []
        assert h.state.completed_ids() == ["setup_dnf"]

"""Tests for InteractionCollector."""

import pytest

from rumcore.interaction import InteractionCollector, OverlapPolicy
from rumcore.lifecycle import LifeCycleEventType
from rumcore.models import Element, InputEvent, InteractionReportName

SAVE_BUTTON = Element(
    tag_name="BUTTON",
    attributes={"class": "btn"},
    text_content="Save",
    has_child_nodes=True,
)


def make_collector(lifecycle, scheduler, policy=OverlapPolicy.RACE, **kwargs):
    collector = InteractionCollector(
        lifecycle, scheduler, busy_delay=100, idle_delay=100, overlap_policy=policy, **kwargs
    )
    collector.start()
    return collector


@pytest.fixture
def reports(lifecycle, recorder):
    recorder.attach(
        lifecycle,
        LifeCycleEventType.INTERACTION_EXTENDED,
        LifeCycleEventType.INTERACTION_COLLECTED,
    )
    return recorder


class TestReports:
    """Tests for published extensions and terminal reports."""

    def test_completed_report(self, lifecycle, scheduler, reports):
        make_collector(lifecycle, scheduler)
        scheduler.advance_to(5)
        lifecycle.notify(LifeCycleEventType.USER_INPUT, InputEvent("click", SAVE_BUTTON))
        scheduler.advance_to(25)
        lifecycle.notify(LifeCycleEventType.DOM_MUTATED)
        scheduler.advance_to(1000)

        extensions = reports.of(LifeCycleEventType.INTERACTION_EXTENDED)
        collected = reports.of(LifeCycleEventType.INTERACTION_COLLECTED)
        assert len(extensions) == 1
        assert extensions[0].elapsed == 20
        assert extensions[0].reason == "dom_mutated"
        assert len(collected) == 1

        report = collected[0]
        assert report.name is InteractionReportName.COMPLETED
        assert report.start_time == 5
        assert report.duration == 120
        assert report.interaction_id == extensions[0].interaction_id
        assert report.context.element == '<button class="btn">...</button>'
        assert report.context.content == "Save"
        assert report.context.reason == "dom_mutated"
        assert report.input_type == "click"

    def test_ignored_report(self, lifecycle, scheduler, reports):
        make_collector(lifecycle, scheduler)
        lifecycle.notify(LifeCycleEventType.USER_INPUT, InputEvent("click", SAVE_BUTTON))
        scheduler.advance_to(1000)

        assert reports.of(LifeCycleEventType.INTERACTION_EXTENDED) == []
        collected = reports.of(LifeCycleEventType.INTERACTION_COLLECTED)
        assert len(collected) == 1
        assert collected[0].name is InteractionReportName.IGNORED
        assert collected[0].duration is None
        assert collected[0].context.content == "Save"
        assert collected[0].context.reason is None

    def test_input_without_target(self, lifecycle, scheduler, reports):
        make_collector(lifecycle, scheduler)
        lifecycle.notify(LifeCycleEventType.USER_INPUT, InputEvent("keydown"))
        scheduler.advance_to(1000)

        report = reports.of(LifeCycleEventType.INTERACTION_COLLECTED)[0]
        assert report.context.element is None
        assert report.context.content is None
        assert report.input_type == "keydown"

    def test_terminal_report_is_last(self, lifecycle, scheduler, reports):
        make_collector(lifecycle, scheduler)
        lifecycle.notify(LifeCycleEventType.USER_INPUT, InputEvent())
        for t in (10, 40, 70):
            scheduler.advance_to(t)
            lifecycle.notify(LifeCycleEventType.DOM_MUTATED)
        scheduler.advance_to(1000)
        lifecycle.notify(LifeCycleEventType.DOM_MUTATED)

        assert [kind for kind, _ in reports.events] == [
            LifeCycleEventType.INTERACTION_EXTENDED,
            LifeCycleEventType.INTERACTION_EXTENDED,
            LifeCycleEventType.INTERACTION_EXTENDED,
            LifeCycleEventType.INTERACTION_COLLECTED,
        ]


class TestOverlapPolicy:
    """Tests for triggers arriving while an interaction is open."""

    def test_race_opens_independent_interactions(self, lifecycle, scheduler, reports):
        collector = make_collector(lifecycle, scheduler, OverlapPolicy.RACE)
        first = collector.handle_input(InputEvent())
        scheduler.advance_to(50)
        second = collector.handle_input(InputEvent())

        assert first and second and first != second
        assert len(collector.active_interaction_ids) == 2

        scheduler.advance_to(1000)
        collected = reports.of(LifeCycleEventType.INTERACTION_COLLECTED)
        assert {r.interaction_id for r in collected} == {first, second}
        assert collector.active_interaction_ids == []

    def test_drop_ignores_new_trigger(self, lifecycle, scheduler, reports):
        collector = make_collector(lifecycle, scheduler, OverlapPolicy.DROP)
        first = collector.handle_input(InputEvent())
        scheduler.advance_to(50)

        assert collector.handle_input(InputEvent()) is None

        scheduler.advance_to(1000)
        collected = reports.of(LifeCycleEventType.INTERACTION_COLLECTED)
        assert [r.interaction_id for r in collected] == [first]

    def test_queue_opens_after_current_resolves(self, lifecycle, scheduler, reports):
        collector = make_collector(lifecycle, scheduler, "queue")
        collector.handle_input(InputEvent("click", SAVE_BUTTON))
        scheduler.advance_to(50)
        assert collector.handle_input(InputEvent("keydown")) is None
        assert collector.queued_count == 1

        # first aborts at 100, queued one opens then and aborts at 200
        scheduler.advance_to(150)
        assert collector.queued_count == 0
        assert len(collector.active_interaction_ids) == 1

        scheduler.advance_to(1000)
        collected = reports.of(LifeCycleEventType.INTERACTION_COLLECTED)
        assert [r.input_type for r in collected] == ["click", "keydown"]
        assert collected[1].start_time == 100

    def test_queue_is_bounded(self, lifecycle, scheduler, reports):
        collector = make_collector(lifecycle, scheduler, OverlapPolicy.QUEUE, max_queued=2)
        collector.handle_input(InputEvent("click"))
        for input_type in ("keydown", "keyup", "scroll"):
            assert collector.handle_input(InputEvent(input_type)) is None

        assert collector.queued_count == 2

        scheduler.advance_to(1000)
        collected = reports.of(LifeCycleEventType.INTERACTION_COLLECTED)
        assert [r.input_type for r in collected] == ["click", "keydown", "keyup"]

    def test_queue_limit_must_be_positive(self, lifecycle, scheduler):
        with pytest.raises(ValueError):
            InteractionCollector(lifecycle, scheduler, max_queued=0)

    def test_unknown_policy_rejected(self, lifecycle, scheduler):
        with pytest.raises(ValueError):
            InteractionCollector(lifecycle, scheduler, overlap_policy="merge")


class TestCollectorLifecycle:
    """Tests for start/stop."""

    def test_stop_unsubscribes_and_disposes(self, lifecycle, scheduler, reports):
        collector = make_collector(lifecycle, scheduler)
        lifecycle.notify(LifeCycleEventType.USER_INPUT, InputEvent())
        collector.stop()

        lifecycle.notify(LifeCycleEventType.USER_INPUT, InputEvent())
        scheduler.advance_to(1000)

        assert reports.events == []
        assert collector.active_interaction_ids == []

    def test_negative_delay_rejected(self, lifecycle, scheduler):
        with pytest.raises(ValueError):
            InteractionCollector(lifecycle, scheduler, idle_delay=-1)

"""Tests for observable state holders."""

from pressocheck.services.observable import Observable


class TestObservable:
    def test_new_subscriber_receives_current_value(self) -> None:
        observable = Observable(3, name="count")
        seen: list[int] = []

        observable.subscribe(seen.append)

        assert seen == [3]
        assert observable.value == 3

    def test_changes_are_pushed_to_every_subscriber(self) -> None:
        observable = Observable("a")
        first: list[str] = []
        second: list[str] = []
        observable.subscribe(first.append)
        observable.subscribe(second.append)

        observable.set("b")

        assert first == ["a", "b"]
        assert second == ["a", "b"]

    def test_equal_values_are_conflated(self) -> None:
        observable: Observable[str | None] = Observable(None)
        seen: list[str | None] = []
        observable.subscribe(seen.append)

        observable.set(None)
        observable.set("x")
        observable.set("x")

        assert seen == [None, "x"]

    def test_disposed_subscription_stops_delivery(self) -> None:
        observable = Observable(0)
        seen: list[int] = []
        subscription = observable.subscribe(seen.append)

        subscription.dispose()
        observable.set(1)

        assert seen == [0]
        assert not subscription.active
        assert observable.subscriber_count == 0

    def test_dispose_twice_is_harmless(self) -> None:
        observable = Observable(0)
        subscription = observable.subscribe(lambda _: None)

        subscription.dispose()
        subscription.dispose()

        assert observable.subscriber_count == 0

    def test_listener_may_unsubscribe_during_notification(self) -> None:
        observable = Observable(0)
        seen: list[int] = []
        holder = {}

        def once(value: int) -> None:
            seen.append(value)
            if value > 0:
                holder["subscription"].dispose()

        holder["subscription"] = observable.subscribe(once)
        observable.set(1)
        observable.set(2)

        assert seen == [0, 1]

    def test_failing_listener_does_not_starve_the_others(self) -> None:
        observable = Observable(0, name="count")
        seen: list[int] = []

        def broken(value: int) -> None:
            if value:
                raise RuntimeError("render failed")

        observable.subscribe(broken)
        observable.subscribe(seen.append)

        observable.set(5)

        assert observable.value == 5
        assert seen == [0, 5]

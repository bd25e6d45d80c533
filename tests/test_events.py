from locatorkit.events import DomEvent, EventHub, deliver


def test_stopped_event_still_reaches_other_listeners_on_the_hub() -> None:
    events = EventHub()
    seen: list[str] = []

    def _stopper(event: DomEvent) -> None:
        seen.append("capture")
        event.prevent_default()
        event.stop_propagation()

    events.add_listener("click", lambda event: seen.append("bubble"), capture=False)
    events.add_listener("click", _stopper, capture=True)
    events.add_listener("click", lambda event: seen.append("second-capture"), capture=True)

    event = events.click(None)
    assert seen == ["capture", "second-capture", "bubble"]
    assert event.propagation_stopped
    assert event.default_prevented


def test_listeners_are_registered_once_and_removed() -> None:
    events = EventHub()
    listener = lambda event: None  # noqa: E731
    events.add_listener("mousemove", listener)
    events.add_listener("mousemove", listener)
    assert events.listener_count("mousemove") == 1
    events.remove_listener("mousemove", listener)
    assert events.listener_count() == 0


def test_deliver_reports_observer_failures() -> None:
    received: list[str] = []
    assert deliver(received.append, "#a")
    assert received == ["#a"]
    assert not deliver(None, "#a")

    def _broken(_payload: str) -> None:
        raise ValueError("observer gone")

    assert not deliver(_broken, "#a")

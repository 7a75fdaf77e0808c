from robotprefs.channel import PreferencesChannel
from robotprefs.propagator import LocalEditPropagator
from robotprefs.reconciler import Reconciler
from robotprefs.registry import BindingRegistry
from robotprefs.values import PreferenceValue, PreferencesSnapshot


class RecordingSink:
    def __init__(self):
        self.published = []

    def publish(self, previous, current):
        self.published.append((previous, current))


def _wire(initial):
    sink = RecordingSink()
    channel = PreferencesChannel(initial, sink=sink)
    registry = BindingRegistry(on_create=LocalEditPropagator(channel).attach)
    reconciler = Reconciler(registry)
    channel.add_listener(reconciler.apply)
    reconciler.apply(None, initial)
    return channel, registry, sink


def test_set_data_notifies_then_publishes():
    order = []
    sink = RecordingSink()
    channel = PreferencesChannel(sink=sink)
    channel.add_listener(lambda p, c: order.append(("listener", len(sink.published))))
    snap = PreferencesSnapshot({"a": 1})
    channel.set_data(snap)
    assert order == [("listener", 0)]
    assert sink.published == [(PreferencesSnapshot(), snap)]
    assert channel.current is snap


def test_receive_never_publishes():
    sink = RecordingSink()
    channel = PreferencesChannel(sink=sink)
    seen = []
    channel.add_listener(lambda p, c: seen.append(c))
    channel.receive(PreferencesSnapshot({"a": 1}))
    channel.receive(PreferencesSnapshot({"a": 1}))
    assert len(seen) == 1
    assert sink.published == []


def test_local_edit_is_published():
    channel, registry, sink = _wire(PreferencesSnapshot({"gain": 1.0}))
    registry.get("gain").set(PreferenceValue.of(2.0))
    assert channel.current["gain"].payload == 2.0
    assert len(sink.published) == 1
    assert sink.published[0][1]["gain"].payload == 2.0


def test_remote_update_is_not_echoed():
    channel, registry, sink = _wire(PreferencesSnapshot({"gain": 1.0}))
    channel.receive(PreferencesSnapshot({"gain": 5.0, "new": "x"}))
    assert registry.get("gain").value.payload == 5.0
    assert registry.get("new").value.payload == "x"
    assert sink.published == []


def test_listener_removal():
    channel = PreferencesChannel()
    seen = []
    remove = channel.add_listener(lambda p, c: seen.append(c))
    remove()
    channel.receive(PreferencesSnapshot({"a": 1}))
    assert seen == []

import threading

import pytest

from signalbus import (
    NameAlreadyBoundError,
    Signal,
    SignalRegistry,
    get,
    list_signals,
    registry,
    remove,
    store,
)


def test_store_then_get_round_trip():
    signal = Signal()
    store("k", signal)
    assert get("k") is signal

    remove("k")
    assert get("k") is None


def test_get_missing_name_returns_none():
    assert get("missing") is None
    assert "missing" not in registry


def test_remove_missing_name_is_noop():
    remove("missing")
    remove("missing")
    assert len(registry) == 0


def test_collision_without_override_leaves_registry_unchanged():
    s1, s2 = Signal(), Signal()
    store("k", s1)

    with pytest.raises(NameAlreadyBoundError) as excinfo:
        store("k", s2, override=False)

    assert excinfo.value.name == "k"
    assert get("k") is s1

    store("k", s2, override=True)
    assert get("k") is s2


def test_list_returns_a_copy():
    a, b = Signal(), Signal()
    store("a", a)
    store("b", b)

    listing = list_signals()
    assert listing == {"a": a, "b": b}

    listing.pop("a")
    listing["c"] = Signal()
    assert list_signals() == {"a": a, "b": b}


def test_remove_does_not_destroy_signal(drain):
    signal = Signal()
    calls = []
    signal.connect(calls.append)
    store("k", signal)

    remove("k")
    signal.fire("still alive")
    drain()

    assert calls == ["still alive"]


def test_get_or_create_is_explicit():
    fresh = SignalRegistry()
    assert fresh.get("ready") is None

    created = fresh.get_or_create("ready")
    assert created.name == "ready"
    assert fresh.get_or_create("ready") is created
    assert fresh.get("ready") is created


def test_registered_signal_is_reachable_from_listener(drain):
    target = Signal()
    store("target", target)
    seen = []
    target.connect(seen.append)

    source = Signal()
    source.connect(lambda value: get("target").fire(value))
    source.fire("relayed")

    drain()
    assert seen == ["relayed"]


def test_store_and_remove_during_lookups_is_safe():
    names = [f"sig-{n}" for n in range(20)]
    errors = []
    stop = threading.Event()

    def writer():
        try:
            while not stop.is_set():
                for name in names:
                    store(name, Signal(name), override=True)
                for name in names:
                    remove(name)
        except Exception as exc:  # pragma: no cover - failure path
            errors.append(exc)

    def reader():
        try:
            while not stop.is_set():
                for name in names:
                    signal = get(name)
                    assert signal is None or signal.name == name
                for name, signal in list_signals().items():
                    assert signal.name == name
        except Exception as exc:  # pragma: no cover - failure path
            errors.append(exc)

    workers = [threading.Thread(target=writer) for _ in range(2)]
    workers += [threading.Thread(target=reader) for _ in range(3)]
    for worker in workers:
        worker.start()
    stop.wait(0.3)
    stop.set()
    for worker in workers:
        worker.join(5)

    assert errors == []

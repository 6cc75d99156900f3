import threading
from dataclasses import dataclass

import pytest

from mcp23s17.core.exceptions import InvalidArgumentError
from mcp23s17.core.listeners import ListenerSet
from mcp23s17.core.pin import Pin


def test_add_and_notify_in_registration_order(listener_log, make_listener):
    listeners = ListenerSet()
    listeners.add(make_listener("first"))
    listeners.add(make_listener("second"))

    listeners.notify(True, Pin.PIN4)

    assert listener_log == [("first", True, Pin.PIN4), ("second", True, Pin.PIN4)]


def test_duplicate_add_rejected():
    listeners = ListenerSet()

    def listener(captured_value, pin):
        pass

    listeners.add(listener)
    with pytest.raises(InvalidArgumentError, match="already registered"):
        listeners.add(listener)
    assert len(listeners) == 1


def test_remove_unregistered_rejected():
    listeners = ListenerSet()
    with pytest.raises(InvalidArgumentError, match="unregistered"):
        listeners.remove(lambda captured_value, pin: None)


@pytest.mark.parametrize("method", ["add", "remove"])
def test_none_listener_rejected(method):
    listeners = ListenerSet()
    with pytest.raises(InvalidArgumentError, match="null listener"):
        getattr(listeners, method)(None)


def test_distinct_but_equal_looking_lambdas_are_separate():
    listeners = ListenerSet()
    listeners.add(lambda captured_value, pin: None)
    listeners.add(lambda captured_value, pin: None)
    assert len(listeners) == 2


def test_bound_method_of_same_instance_counts_as_registered():
    class Handler:
        def on_interrupt(self, captured_value, pin):
            pass

    handler = Handler()
    listeners = ListenerSet()
    listeners.add(handler.on_interrupt)
    assert handler.on_interrupt in listeners
    with pytest.raises(InvalidArgumentError):
        listeners.add(handler.on_interrupt)
    listeners.remove(handler.on_interrupt)
    assert len(listeners) == 0


def test_removed_listener_not_notified(listener_log, make_listener):
    listeners = ListenerSet()
    listener = make_listener("gone")
    listeners.add(listener)
    listeners.remove(listener)

    listeners.notify(False, Pin.PIN0)

    assert listener_log == []


def test_listener_may_unregister_itself_during_notify():
    listeners = ListenerSet()
    calls = []

    def one_shot(captured_value, pin):
        calls.append(pin)
        listeners.remove(one_shot)

    listeners.add(one_shot)
    listeners.notify(True, Pin.PIN1)
    listeners.notify(True, Pin.PIN1)

    assert calls == [Pin.PIN1]


def test_concurrent_registration_is_consistent():
    listeners = ListenerSet()
    callbacks = [lambda captured_value, pin: None for _ in range(200)]

    def register(chunk):
        for callback in chunk:
            listeners.add(callback)

    threads = [threading.Thread(target=register, args=(callbacks[i::4],)) for i in range(4)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(listeners) == 200


@dataclass(frozen=True)
class Forwarder:
    target: str

    def __call__(self, captured_value, pin):
        pass


def test_equal_but_distinct_callables_are_separate_listeners():
    first, second = Forwarder("led"), Forwarder("led")
    assert first == second and first is not second

    listeners = ListenerSet()
    listeners.add(first)
    listeners.add(second)

    assert len(listeners) == 2


def test_remove_equal_but_unregistered_callable_rejected():
    registered = Forwarder("led")
    listeners = ListenerSet()
    listeners.add(registered)

    with pytest.raises(InvalidArgumentError, match="unregistered"):
        listeners.remove(Forwarder("led"))
    assert Forwarder("led") not in listeners
    assert registered in listeners
    assert len(listeners) == 1


def test_remove_takes_out_the_identical_instance_only():
    first, second = Forwarder("a"), Forwarder("a")
    listeners = ListenerSet()
    listeners.add(first)
    listeners.add(second)

    listeners.remove(second)

    assert first in listeners
    assert second not in listeners


def test_bound_methods_of_equal_instances_are_separate():
    @dataclass
    class Handler:
        name: str

        def on_interrupt(self, captured_value, pin):
            pass

    one, other = Handler("x"), Handler("x")
    listeners = ListenerSet()
    listeners.add(one.on_interrupt)
    listeners.add(other.on_interrupt)

    assert len(listeners) == 2

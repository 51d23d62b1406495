from asyncstate import StateCell, StateSink
from asyncstate import async_state_n as ASN


def test_cell_holds_and_replaces_state():
    cell = StateCell(ASN.not_initiated())
    assert cell.get() == ASN.not_initiated()
    cell.set(ASN.success(1))
    assert cell.get() == ASN.success(1)


def test_listeners_are_notified_in_subscription_order():
    cell = StateCell(ASN.not_initiated())
    seen = []
    cell.subscribe(lambda s: seen.append(("a", s)))
    cell.subscribe(lambda s: seen.append(("b", s)))

    cell.set(ASN.loading())
    assert seen == [("a", ASN.loading()), ("b", ASN.loading())]


def test_publishing_same_object_does_not_notify():
    cell = StateCell(ASN.loading())
    seen = []
    cell.subscribe(seen.append)
    cell.set(ASN.loading())
    assert seen == []


def test_unsubscribe_stops_notifications():
    cell = StateCell(ASN.not_initiated())
    seen = []
    unsubscribe = cell.subscribe(seen.append)
    cell.set(ASN.loading())
    unsubscribe()
    unsubscribe()
    cell.set(ASN.success(1))
    assert seen == [ASN.loading()]


def test_cell_satisfies_sink_protocol():
    assert isinstance(StateCell(ASN.loading()), StateSink)

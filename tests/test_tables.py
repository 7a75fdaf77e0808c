import threading

import pytest

from robotprefs import tables
from robotprefs.errors import SourceMismatchError, TableUnavailableError
from robotprefs.sources import (
    DataSource,
    DataType,
    NetworkTableSource,
    StaticSource,
    delete_preference,
)
from robotprefs.tables import MemoryTableInstance, is_metadata, normalize_key, snapshot_of
from robotprefs.values import PreferencesSnapshot


def test_normalize_key():
    assert normalize_key("Preferences") == "/Preferences"
    assert normalize_key("//Preferences///arm/", False) == "Preferences/arm"
    assert normalize_key("/") == "/"


@pytest.mark.parametrize(
    "key,expected",
    [(".type", True), ("~meta", True), ("arm/.hidden", True), ("arm/kP", False), ("a.b", False)],
)
def test_is_metadata(key, expected):
    assert is_metadata(key) is expected


def test_is_metadata_without_prefixes():
    assert is_metadata(".type", prefixes=()) is False


def test_memory_table_notifies_on_change_only():
    table = MemoryTableInstance().get_table("/Preferences")
    seen = []
    remove = table.add_listener(seen.append)
    table.put("a", 1)
    table.put("a", 1.0)
    table.put("a", 2)
    table.delete("a")
    table.delete("a")
    remove()
    table.put("b", 1)
    assert seen == ["a", "a", "a"]


def test_tables_are_shared_by_normalised_path():
    inst = MemoryTableInstance()
    assert inst.get_table("/Preferences") is inst.get_table("Preferences//")


def test_memory_table_is_thread_safe():
    table = MemoryTableInstance().get_table("t")

    def writer(n):
        for i in range(200):
            table.put(f"k{n}_{i}", i)

    threads = [threading.Thread(target=writer, args=(n,)) for n in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert len(snapshot_of(table)) == 800


def test_source_dispatch_is_used():
    inst = MemoryTableInstance()
    queued = []
    source = NetworkTableSource("/Preferences", inst, dispatch=queued.append)
    received = []
    source.subscribe(received.append)
    inst.get_table("Preferences").put("a", 1)
    assert received == []
    queued.pop()()
    assert received == [PreferencesSnapshot({"a": 1})]


def test_source_publish_writes_changed_keys_only():
    inst = MemoryTableInstance()
    table = inst.get_table("Preferences")
    table.put("a", 1)
    writes = []
    table.add_listener(writes.append)
    source = NetworkTableSource("Preferences", inst)
    prev = PreferencesSnapshot({"a": 1})
    source.publish(prev, prev.put("b", True))
    assert writes == ["b"]
    assert table.get("b").payload is True


def test_delete_requires_network_tables_source():
    inst = MemoryTableInstance()
    with pytest.raises(SourceMismatchError):
        delete_preference(None, "a", inst)
    with pytest.raises(SourceMismatchError):
        delete_preference(StaticSource("x"), "a", inst)

    class PlainSource(NetworkTableSource):
        data_type = DataType("Number")

    with pytest.raises(SourceMismatchError):
        delete_preference(PlainSource("/Preferences", inst), "a", inst)


def test_delete_normalises_source_name():
    inst = MemoryTableInstance()
    table = inst.get_table("Preferences/arm")
    table.put("kP", 0.5)
    delete_preference(NetworkTableSource("//Preferences/arm", inst), "kP", inst)
    assert table.keys() == []


def test_base_source_is_abstract():
    with pytest.raises(TypeError):
        DataSource("x")

    class Fixed(DataSource):
        def snapshot(self):
            return PreferencesSnapshot()

    source = Fixed("x")
    assert source.type.name == "Static"
    assert source.subscribe(lambda snap: None)() is None


def test_default_instance(monkeypatch):
    monkeypatch.setattr(tables, "_DEFAULT", None)
    first = tables.get_default_instance()
    assert isinstance(first, MemoryTableInstance)
    assert tables.get_default_instance() is first
    other = MemoryTableInstance()
    tables.set_default_instance(other)
    assert tables.get_default_instance() is other


def test_ntcore_missing(monkeypatch):
    import builtins

    real_import = builtins.__import__

    def fake_import(name, *args, **kwargs):
        if name == "ntcore":
            raise ModuleNotFoundError(name)
        return real_import(name, *args, **kwargs)

    monkeypatch.setattr(builtins, "__import__", fake_import)
    with pytest.raises(TableUnavailableError):
        tables.NtcoreTableInstance()

import pytest

from moltable.model import Number, Property, PropertySet, Record, Table, Text, make_value


def test_make_value_classifies_numbers_and_text():
    assert make_value(3) == Number(3.0)
    assert make_value(2.5) == Number(2.5)
    assert make_value("soluble") == Text("soluble")
    assert make_value(Text("kept")) == Text("kept")


def test_make_value_rejects_unclassifiable_values():
    with pytest.raises(TypeError):
        make_value(True)
    with pytest.raises(TypeError):
        make_value(None)
    with pytest.raises(TypeError):
        Number("1.0")
    with pytest.raises(TypeError):
        Text(1.0)


def test_numeric_and_text_values_never_compare_equal():
    assert Number(1.0) != Text("1.0")
    assert isinstance(Number(2).value, float)


def test_property_identity_is_key_only():
    assert Property("Solubility", Number(1.0)) == Property("Solubility", Text("high"))
    assert Property("Alpha", Number(9.0)) < Property("Beta", Number(0.0))


def test_property_requires_non_empty_key():
    with pytest.raises(ValueError):
        Property("", Number(1.0))


def test_property_set_orders_by_key_and_keeps_first_duplicate():
    props = PropertySet(
        [
            Property("b", Number(2)),
            Property("a", Text("x")),
            Property("b", Number(3)),
        ]
    )

    assert props.keys() == ["a", "b"]
    assert len(props) == 2
    assert props.get("b").value == Number(2.0)
    assert "a" in props
    assert "c" not in props
    assert props.get("c") is None


def test_property_set_equality_compares_values():
    assert PropertySet.from_pairs({"a": 1}) == PropertySet.from_pairs([("a", 1.0)])
    assert PropertySet.from_pairs({"a": 1}) != PropertySet.from_pairs({"a": 2})
    assert PropertySet.from_pairs({"a": 1}) != PropertySet.from_pairs({"a": "1"})


def test_record_identity_ignores_name_and_properties():
    first = Record.from_row("aspirin", "Aspirin", {"Solubility": 3.3})
    second = Record.from_row("aspirin", "ASPIRIN", {"Solubility": 1.0})

    assert first == second
    assert hash(first) == hash(second)
    assert first.properties != second.properties
    assert Record("a", "Z") < Record("b", "A")


def test_record_requires_non_empty_key():
    with pytest.raises(ValueError):
        Record("", "Nameless")


def test_record_accepts_plain_property_iterables():
    record = Record("water", "Water", [Property("Boiling Point", Number(100.0))])

    assert isinstance(record.properties, PropertySet)
    assert record.properties.keys() == ["Boiling Point"]


def test_record_copy_is_a_distinct_equal_value():
    record = Record.from_row("caffeine", "Caffeine", {"Solubility": 21.6, "Molecular Weight": 194.19})
    copied = record.copy()

    assert copied == record
    assert copied is not record
    assert copied.name == "Caffeine"
    assert copied.properties == record.properties


def test_later_rows_with_same_key_are_dropped_entirely():
    """Second row shares the key, so its name and properties never make it in."""

    table = Table.from_rows([("x", "X", {}), ("x", "X2", {"p": 1})])

    assert len(table) == 1
    record = table.get("x")
    assert record.name == "X"
    assert len(record.properties) == 0


def test_insert_reports_duplicates_and_keeps_first():
    table = Table()

    assert table.insert(Record("a", "A")) is True
    assert table.insert(Record("a", "A2")) is False
    assert table.get("a").name == "A"
    assert len(table) == 1


def test_table_iterates_in_strictly_increasing_key_order():
    keys = ["delta", "alpha", "charlie", "bravo", "alpha", "delta"]
    table = Table(Record(k, k.title()) for k in keys)

    assert [r.key for r in table] == ["alpha", "bravo", "charlie", "delta"]
    assert table.keys() == sorted(set(keys))


def test_table_order_is_codepoint_order():
    table = Table.from_records(Record(k, k) for k in ["b", "B", "a", "_"])

    assert table.keys() == ["B", "_", "a", "b"]


def test_table_lookup_and_membership():
    table = Table([Record("a", "A"), Record("c", "C")])

    assert "a" in table
    assert Record("c", "something else") in table
    assert "b" not in table
    assert 42 not in table
    assert table.get("b") is None
    assert table.first().key == "a"
    assert Table().first() is None
    assert not Table()


def test_from_sorted_rejects_out_of_order_or_repeated_keys():
    with pytest.raises(ValueError):
        Table.from_sorted([Record("b", "B"), Record("a", "A")])
    with pytest.raises(ValueError):
        Table.from_sorted([Record("a", "A"), Record("a", "A")])


def test_table_equality_is_by_keys():
    assert Table([Record("a", "A")]) == Table([Record("a", "Other", {"p": 1.0})])
    assert Table() == Table()
    assert Table() != Table([Record("a", "A")])


def test_iteration_is_unaffected_by_inserts_during_loop():
    table = Table([Record("a", "A"), Record("b", "B")])

    seen = []
    for record in table:
        seen.append(record.key)
        table.insert(Record(record.key + "z", "later"))

    assert seen == ["a", "b"]
    assert table.keys() == ["a", "az", "b", "bz"]


def test_record_constructor_accepts_a_mapping_of_raw_values():
    record = Record("a", "Other", {"p": 1.0, "q": "blue"})

    assert record.properties == PropertySet.from_pairs([("p", 1.0), ("q", "blue")])
    assert record.properties.get("q").value == Text("blue")


def test_table_get_with_non_string_key_returns_default():
    table = Table([Record("a", "A")])
    fallback = Record("z", "Z")

    assert table.get(42) is None
    assert table.get(None, fallback) is fallback

import pytest

from jsonvalue.iterator import ObjectIterator, iter_begin, iter_end, iter_init_default
from jsonvalue.value import new_array, new_int, new_object, new_string


def _sample():
    obj = new_object()
    obj.object_add("first", new_string("george"))
    obj.object_add("age", new_int(100))
    obj.object_add("nothing", None)
    return obj


def _walk(obj):
    it = iter_begin(obj)
    end = iter_end(obj)
    names = []
    while it != end:
        names.append(it.peek_name())
        it.next()
    return names


def test_empty_object_begin_equals_end():
    obj = new_object()
    assert iter_begin(obj) == iter_end(obj)


def test_walk_yields_names_in_insertion_order():
    assert _walk(_sample()) == ["first", "age", "nothing"]


def test_peek_value_returns_stored_values():
    obj = _sample()
    it = iter_begin(obj)
    assert it.peek_value().payload == "george"
    it.next()
    assert it.peek_value().payload == 100
    it.next()
    assert it.peek_value() is None


def test_iterator_reaches_end_after_last_pair():
    obj = _sample()
    it = iter_begin(obj)
    for _ in range(3):
        it.next()
    assert it == iter_end(obj)


def test_next_at_end_raises():
    obj = _sample()
    with pytest.raises(IndexError):
        iter_end(obj).next()


def test_peek_at_end_raises():
    obj = _sample()
    end = iter_end(obj)
    with pytest.raises(IndexError):
        end.peek_name()
    with pytest.raises(IndexError):
        end.peek_value()


def test_default_iterator_cannot_be_used():
    it = iter_init_default()
    with pytest.raises(IndexError):
        it.next()
    with pytest.raises(IndexError):
        it.peek_name()


def test_default_iterator_equals_end():
    assert iter_init_default() == iter_end(_sample())


def test_begin_requires_object():
    with pytest.raises(TypeError):
        iter_begin(new_array())
    with pytest.raises(TypeError):
        iter_begin(None)


def test_end_requires_object():
    with pytest.raises(TypeError):
        iter_end(new_string("x"))
    with pytest.raises(TypeError):
        iter_end(None)


def test_two_begin_iterators_are_equal_and_diverge_after_next():
    obj = _sample()
    a = iter_begin(obj)
    b = iter_begin(obj)
    assert a == b
    a.next()
    assert a != b
    b.next()
    assert a == b


def test_iterators_of_different_objects_differ():
    a = iter_begin(_sample())
    b = iter_begin(_sample())
    assert a.peek_name() == b.peek_name() == "first"
    assert (a == b) is False


def test_deleting_upcoming_field_skips_it():
    obj = _sample()
    it = iter_begin(obj)
    obj.object_del("age")
    it.next()
    assert it.peek_name() == "nothing"


def test_replacing_value_is_seen_by_iterator():
    obj = _sample()
    it = iter_begin(obj)
    obj.object_add("first", new_int(7))
    assert it.peek_value().payload == 7


def test_peek_value_of_deleted_current_field_raises():
    obj = _sample()
    it = iter_begin(obj)
    obj.object_del("first")
    with pytest.raises(KeyError):
        it.peek_value()


def test_comparison_with_other_type_is_unequal():
    assert (iter_init_default() == "end") is False


def test_explicit_construction_at_end_equals_end():
    obj = _sample()
    assert ObjectIterator(obj, ("first",), 1) == iter_end(obj)
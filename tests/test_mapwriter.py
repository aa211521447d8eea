"""Tests for MapWriter."""

import pytest

from pathwalk import InvalidPathError, MapWriter, Path, PathBlockedError


def test_build_nested_map():
    """Test building a map from path/value pairs."""
    mw = MapWriter()
    mw.write('person.address.street', 'Sunset Blvd')
    mw.write('person.address.state', 'CA')
    mw.write('person.firstName', 'John')
    mw.write('person.lastName', 'Smith')
    mw.write('person.born', '1980-01-01')
    mw.write('person.extra', None)
    assert mw.get_map() == {
        'person': {
            'address': {'street': 'Sunset Blvd', 'state': 'CA'},
            'firstName': 'John',
            'lastName': 'Smith',
            'born': '1980-01-01',
            'extra': None,
        }
    }


def test_write_returns_writer():
    """Test chaining writes."""
    mw = MapWriter()
    assert mw.write('a', 1) is mw
    assert mw.write('b', 2).write('c', 3).get_map() == {'a': 1, 'b': 2, 'c': 3}


def test_escaped_keys():
    """Test keys containing the separator."""
    mw = MapWriter().write('hosts.www^.example^.com', 'up')
    assert mw.get_map() == {'hosts': {'www.example.com': 'up'}}
    mw.write(Path(['hosts', 'mail.example.com']), 'down')
    assert mw.get_map()['hosts']['mail.example.com'] == 'down'


def test_overwrite_value():
    """Test that writing a value over a value replaces it."""
    mw = MapWriter().write('a.b', 1).write('a.b', 2)
    assert mw.get_map() == {'a': {'b': 2}}


def test_path_blocked_by_value():
    """Test that a key holding a value cannot become a map."""
    mw = MapWriter().write('person.address', 'Sunset Blvd')
    with pytest.raises(PathBlockedError) as exc_info:
        mw.write('person.address.street', 'Sunset Blvd')
    assert exc_info.value.path == Path.of('person.address')
    assert exc_info.value.value == 'Sunset Blvd'
    assert str(exc_info.value) == "Key person.address already written: 'Sunset Blvd'"
    assert mw.get_map() == {'person': {'address': 'Sunset Blvd'}}


def test_path_blocked_by_map():
    """Test that a key holding a map cannot be overwritten with a value."""
    mw = MapWriter().write('person.address.street', 'Sunset Blvd')
    with pytest.raises(PathBlockedError):
        mw.write('person.address', 'Sunset Blvd')
    with pytest.raises(PathBlockedError):
        mw.write('person', None)
    assert mw.get_map() == {'person': {'address': {'street': 'Sunset Blvd'}}}


def test_map_values_rejected():
    """Test that maps cannot be written as values."""
    with pytest.raises(TypeError):
        MapWriter().write('a', {'b': 1})


def test_invalid_paths():
    """Test rejection of null segments and empty paths."""
    mw = MapWriter()
    with pytest.raises(InvalidPathError):
        mw.write('a.^0', 1)
    with pytest.raises(InvalidPathError):
        mw.write(Path([None]), 1)
    with pytest.raises(InvalidPathError):
        mw.write('', 1)
    with pytest.raises(InvalidPathError):
        mw.write(None, 1)
    with pytest.raises(InvalidPathError):
        mw.in_('')
    assert mw.get_map() == {}


def test_in():
    """Test writing relative to a nested map."""
    mw = MapWriter()
    address = mw.in_('person.address')
    address.write('street', 'Sunset Blvd').write('state', 'CA')
    mw.write('person.firstName', 'John')
    assert mw.get_map() == {
        'person': {'address': {'street': 'Sunset Blvd', 'state': 'CA'}, 'firstName': 'John'}
    }
    assert address.get_map() is mw.get_map()
    assert repr(address) == "MapWriter(root='person.address')"


def test_in_creates_empty_map():
    """Test that in_ creates missing maps even when nothing is written."""
    mw = MapWriter()
    mw.in_('a.b')
    assert mw.get_map() == {'a': {'b': {}}}


def test_nested_in():
    """Test in_ called on a scoped writer."""
    mw = MapWriter()
    inner = mw.in_('a').in_('b')
    inner.write('c', 1)
    assert mw.get_map() == {'a': {'b': {'c': 1}}}
    assert repr(inner) == "MapWriter(root='a.b')"


def test_in_blocked_by_value():
    """Test that in_ cannot descend into a value."""
    mw = MapWriter().write('a.b', 1)
    with pytest.raises(PathBlockedError) as exc_info:
        mw.in_('a.b.c')
    assert exc_info.value.path == Path.of('a.b')


def test_blocked_path_is_absolute():
    """Test that errors from a scoped writer report the full path."""
    mw = MapWriter().write('a.b.c', 1)
    with pytest.raises(PathBlockedError) as exc_info:
        mw.in_('a').write('b.c.d', 2)
    assert exc_info.value.path == Path.of('a.b.c')


def test_wrote():
    """Test checking whether a path is bound."""
    mw = MapWriter().write('a.b', None)
    assert mw.wrote('a.b')
    assert mw.wrote('a')
    assert not mw.wrote('a.c')
    assert not mw.wrote('a.b.c')
    assert mw.in_('a').wrote('b')
    assert not mw.in_('a').wrote('a')


def test_existing_map():
    """Test writing into a map passed to the constructor."""
    root = {'a': {'b': 1}}
    mw = MapWriter(root)
    mw.write('a.c', 2)
    assert mw.get_map() is root
    assert root == {'a': {'b': 1, 'c': 2}}
    with pytest.raises(PathBlockedError):
        mw.write('a.b.x', 3)


def test_existing_map_with_illegal_keys():
    """Test that maps with non-string keys are rejected."""
    with pytest.raises(TypeError) as exc_info:
        MapWriter({'a': {1: 'one'}})
    assert '[a]' in str(exc_info.value)


def test_repr():
    """Test the representation of the root writer."""
    assert repr(MapWriter()) == "MapWriter(root='')"


def test_write_creates_intermediate_maps():
    """Test that every missing map along a path is attached to its parent."""
    mw = MapWriter()
    mw.write('a.b.c', 1)
    assert mw.get_map() == {'a': {'b': {'c': 1}}}
    mw.write('a.b.d', 2).write('a.e', 3)
    assert mw.get_map() == {'a': {'b': {'c': 1, 'd': 2}, 'e': 3}}
    assert mw.wrote('a.b.c')
    with pytest.raises(PathBlockedError):
        mw.write('a.b.c.x', 4)

import copy

import numpy as np
import pytest

from geomaps.errors import BandNotFoundError
from geomaps.results import Found, NotFound
from geomaps.store import RasterStore
from geomaps.tests.fixtures.store_fixture import make_store


def test_default_store_is_empty():
    store = RasterStore()
    assert store.get_width() == 0 and store.get_height() == 0
    assert store.bands == [] and store.names == []
    assert store.transform == (0.0, 1.0, 0.0, 0.0, 0.0, 1.0)
    assert store.utm_zone == 0 and store.utm_north is True
    assert store.get_custom_x_origin() == 0.0 and store.get_custom_y_origin() == 0.0


@pytest.mark.parametrize('n,x,y', [(0, 0, 0), (1, 1, 1), (3, 4, 2), (2, 0, 5)])
def test_set_size_allocates_zeroed_bands(n, x, y):
    store = RasterStore()
    store.set_size(n, x, y)
    assert len(store.bands) == n
    assert len(store.names) == n
    assert all(name == '' for name in store.names)
    for band in store.bands:
        assert band.shape == (x * y,)
        assert band.dtype == np.float32
        assert not band.any()


def test_set_size_shrink_drops_trailing_bands():
    store = make_store(names=('a', 'b', 'c'))
    store.set_size(1, 4, 3)
    assert store.names == ['a']
    assert len(store.bands) == 1
    assert np.array_equal(store.bands[0], np.arange(12, dtype='float32'))


def test_set_size_grow_keeps_leading_cells():
    store = make_store(names=('a',), width=2, height=2)
    store.set_size(2, 3, 2)
    assert store.names == ['a', '']
    assert list(store.bands[0]) == [0.0, 1.0, 2.0, 3.0, 0.0, 0.0]
    assert not store.bands[1].any()


def test_set_size_rejects_negative():
    with pytest.raises(ValueError):
        RasterStore().set_size(1, -1, 2)


def test_set_transform_accessors():
    store = RasterStore()
    store.set_transform(10.0, 20.0, 2.0, -3.0)
    assert store.transform == (10.0, 2.0, 0.0, 20.0, 0.0, -3.0)
    assert store.get_utm_pose_x() == 10.0
    assert store.get_utm_pose_y() == 20.0
    assert store.get_scale_x() == 2.0
    # scale accessors are absolute values
    assert store.get_scale_y() == 3.0
    assert store.affine.c == 10.0 and store.affine.e == -3.0


def test_set_transform_defaults_to_unit_pixels():
    store = RasterStore()
    store.set_transform(5.0, 6.0)
    assert store.get_scale_x() == 1.0 and store.get_scale_y() == 1.0


def test_set_utm_leaves_geometry():
    store = make_store()
    before = store.transform
    store.set_utm(18, north=False)
    assert store.utm_zone == 18 and store.utm_north is False
    assert store.transform == before
    assert store.get_width() == 4


def test_get_band_by_name():
    store = make_store()
    assert store.get_band_id('elevation') == 1
    assert store.get_band('elevation') is store.bands[1]
    # returned band is shared with the store
    store.get_band('cost')[0] = 42.0
    assert store.bands[0][0] == 42.0


def test_get_band_missing_raises():
    store = make_store()
    with pytest.raises(BandNotFoundError) as exc:
        store.get_band('missing')
    assert 'missing' in str(exc.value)
    with pytest.raises(KeyError):
        store.get_band_id('missing')


def test_find_band_result():
    store = make_store()
    assert store.find_band('cost') == Found(0)
    lookup = store.find_band('slope')
    assert lookup == NotFound('slope')
    assert not lookup.ok


def test_duplicate_names_first_match():
    store = make_store(names=('cost', 'cost'))
    assert store.get_band_id('cost') == 0


def test_band_as_grid_is_row_major():
    store = make_store()
    grid = store.band_as_grid('cost')
    assert grid.shape == (3, 4)
    assert grid[1, 0] == 4.0
    grid[2, 3] = -1.0
    assert store.get_band('cost')[11] == -1.0


def test_clear_bands_keeps_shape_and_names():
    store = make_store()
    store.clear_bands()
    assert len(store.bands) == len(store.names) == 2
    assert store.names == ['cost', 'elevation']
    for band in store.bands:
        assert band.shape == (12,)
        assert not band.any()
    assert store.get_width() == 4 and store.get_height() == 3
    assert store.get_utm_pose_x() == 100.0


def test_get_band_after_clear_bands():
    store = make_store()
    store.clear_bands()
    assert np.array_equal(store.get_band('elevation'), np.zeros(12, dtype='float32'))
    assert store.band_as_grid('cost').shape == (3, 4)


def test_clear_empties_band_list():
    store = make_store()
    store.clear()
    assert store.bands == [] and store.names == ['cost', 'elevation']
    # set_size restores one band per name
    store.set_size(2, 4, 3)
    assert len(store.bands) == 2
    assert not store.get_band('cost').any()


def test_reset_returns_to_default():
    store = make_store()
    store.set_custom_origin(1.0, 2.0)
    store.reset()
    assert store == RasterStore()
    assert store.utm_zone == 0


def test_copy_is_deep():
    store = make_store()
    store.set_custom_origin(3.0, 4.0)
    for dup in (store.copy(), copy.copy(store), copy.deepcopy(store)):
        assert dup.strict_equals(store)
        dup.bands[0][0] = 99.0
        dup.names[1] = 'renamed'
        assert store.bands[0][0] == 0.0
        assert store.names[1] == 'elevation'


def test_equality_ignores_projection():
    a = make_store(zone=31, north=True)
    b = make_store(zone=18, north=False)
    assert a == b
    assert not a.strict_equals(b)


def test_equality_compares_absolute_scale():
    a = make_store(scale=(0.5, 0.5))
    b = make_store(scale=(0.5, -0.5))
    assert a == b


@pytest.mark.parametrize('mutate', [
    lambda s: s.set_custom_origin(1.0, 0.0),
    lambda s: s.set_transform(100.0, 201.0, 0.5, 0.5),
    lambda s: s.set_transform(100.0, 200.0, 1.0, 0.5),
    lambda s: s.names.__setitem__(0, 'slope'),
    lambda s: s.bands[1].__setitem__(5, -2.0),
    lambda s: s.set_size(3, 4, 3),
    lambda s: s.set_size(2, 3, 4),
])
def test_equality_detects_differences(mutate):
    a = make_store()
    b = make_store()
    mutate(b)
    assert a != b


def test_repr():
    assert repr(make_store()) == 'RasterStore[4,3]'


def test_store_is_unhashable():
    with pytest.raises(TypeError):
        hash(RasterStore())

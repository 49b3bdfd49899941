import pytest

from zerobuild.services.plot import area_from_dimensions, dimensions_from_area, reconcile


def test_editing_length_recomputes_area():
    assert area_from_dimensions(25, 15) == 375


def test_editing_area_makes_square_plot():
    assert dimensions_from_area(400) == (20.0, 20.0)


def test_area_sides_rounded_to_two_places():
    length, breadth = dimensions_from_area(500)
    assert length == breadth == 22.36


def test_reconcile_prefers_dimensions():
    assert reconcile(20, 15, 999) == (20, 15, 300)


def test_reconcile_falls_back_to_area():
    assert reconcile(0, 15, 400) == (20.0, 20.0, 400)


def test_reconcile_requires_something_positive():
    with pytest.raises(ValueError):
        reconcile(None, None, None)

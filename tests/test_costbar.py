import pytest

from perfmodel.costbar import bar_color, bar_width, cost_fraction


def test_zero_cost_has_no_fraction():
    assert cost_fraction(0, 100) == 0.0
    assert cost_fraction(0, 0) == 0.0


def test_fraction_of_total():
    assert cost_fraction(25, 100) == pytest.approx(0.25)
    assert cost_fraction(100, 100) == pytest.approx(1.0)


def test_fraction_is_absolute():
    assert cost_fraction(-50, 100) == cost_fraction(50, 100)
    assert cost_fraction(-30, 100) > 0


def test_zero_total_with_cost_raises():
    with pytest.raises(ValueError):
        cost_fraction(5, 0)


def test_bar_width_scales_and_truncates():
    assert bar_width(200, 0.5) == 100
    assert bar_width(10, 0.99) == 9
    assert bar_width(10, 1.0) == 10
    assert bar_width(10, 0.0) == 0


def test_bar_color_ends():
    hue, saturation, value, alpha = bar_color(0.0)
    assert hue == 120
    assert (saturation, value) == (255, 255)
    assert alpha == 0
    assert bar_color(1.0) == (0, 255, 255, 120)


@pytest.mark.parametrize("low,high", [(0.1, 0.2), (0.3, 0.7), (0.5, 0.9)])
def test_bar_color_is_monotonic(low, high):
    low_hue, _, _, low_alpha = bar_color(low)
    high_hue, _, _, high_alpha = bar_color(high)
    assert low_hue >= high_hue
    assert low_alpha <= high_alpha


def test_bar_color_stays_in_range():
    for step in range(11):
        hue, _, _, alpha = bar_color(step / 10)
        assert 0 <= hue <= 120
        assert 0 <= alpha <= 120
"""Tests for environment-driven configuration."""

import pytest

from polyrecon import config


def test_check_points_default():
    assert config.parse_check_points("") == (0, 100)
    assert config.parse_check_points(" , ") == (0, 100)


def test_check_points_parsed():
    assert config.parse_check_points("0, 100,-7") == (0, 100, -7)


def test_check_points_malformed():
    with pytest.raises(ValueError, match="POLYRECON_CHECK_POINTS must be comma-separated integers"):
        config.parse_check_points("0,ten")

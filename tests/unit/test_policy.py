"""Tests for PoolPolicy and its QueuePool mapping."""

from datetime import timedelta

import pytest

from config.settings import Settings
from database.policy import PoolPolicy


@pytest.mark.unit
def test_default_policy():
    policy = PoolPolicy()

    assert policy.max_open == 25
    assert policy.max_idle == 5
    assert policy.max_lifetime == timedelta(hours=5)


@pytest.mark.unit
def test_engine_options_split_open_limit_into_size_and_overflow():
    options = PoolPolicy().engine_options()

    assert options == {"pool_size": 5, "max_overflow": 20, "pool_recycle": 18000}


@pytest.mark.unit
def test_from_settings():
    settings = Settings(
        _env_file=None,
        db_max_open_conns=10,
        db_max_idle_conns=10,
        db_conn_max_lifetime_minutes=30,
    )

    policy = PoolPolicy.from_settings(settings)

    assert policy.max_overflow == 0
    assert policy.recycle_seconds == 1800


@pytest.mark.unit
@pytest.mark.parametrize(
    "kwargs",
    [
        {"max_open": 0},
        {"max_idle": -1},
        {"max_open": 3, "max_idle": 4},
        {"max_lifetime": timedelta(0)},
    ],
)
def test_invalid_limits_are_rejected(kwargs):
    with pytest.raises(ValueError):
        PoolPolicy(**kwargs)

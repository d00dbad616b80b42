"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import pytest

from discoproto import SchemaRegistry, Subscription, build_registry


@pytest.fixture
def registry() -> SchemaRegistry:
    """Fresh registry with both subscription files registered."""
    return build_registry()


@pytest.fixture
def first_subscription() -> Subscription:
    """Sample subscription."""
    return Subscription(
        subscription_id="sub-1",
        policy_id="Unlimited",
        api_id=12,
        app_id=3,
        subscription_state="UNBLOCKED",
        time_stamp=1634567890123,
        tenant_id=-1234,
        tenant_domain="carbon.super",
        subscription_uuid="5b0d1c8e-1f0a-4f8e-9d63-0c7a1a2b3c4d",
        app_uuid="a1b2c3d4",
        api_uuid="e5f6a7b8",
    )


@pytest.fixture
def second_subscription() -> Subscription:
    """Another sample subscription with a different id."""
    return Subscription(subscription_id="sub-2", api_id=13, subscription_state="BLOCKED")

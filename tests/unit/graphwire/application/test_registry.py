"""Unit tests for ObjectRegistry."""

import pytest

from graphwire.application.registry import ObjectRegistry
from graphwire.domain import InternalConsistencyError, IObjectRegistry


class TestObjectRegistry:
    """Test cases for ObjectRegistry."""

    def test_implements_interface(self):
        """Test that ObjectRegistry implements IObjectRegistry."""
        assert isinstance(ObjectRegistry(), IObjectRegistry)

    def test_starts_empty(self):
        """Test that a new registry holds no instances."""
        registry = ObjectRegistry()

        assert len(registry) == 0
        assert list(registry.identifiers()) == []

    def test_put_and_get(self):
        """Test storing and retrieving an instance."""
        registry = ObjectRegistry()
        instance = object()

        registry.put("app.Service", instance)

        assert registry.get("app.Service") is instance
        assert registry.contains("app.Service")
        assert "app.Service" in registry

    def test_get_missing_raises_key_error(self):
        """Test that reading a missing entry raises KeyError."""
        registry = ObjectRegistry()

        with pytest.raises(KeyError):
            registry.get("app.Missing")

    def test_put_refuses_to_replace(self):
        """Test that a registered instance is never replaced."""
        registry = ObjectRegistry()
        original = object()
        registry.put("app.Service", original)

        with pytest.raises(InternalConsistencyError, match="already registered"):
            registry.put("app.Service", object())

        assert registry.get("app.Service") is original

    def test_identifiers_in_registration_order(self):
        """Test that identifiers are listed in registration order."""
        registry = ObjectRegistry()
        registry.put("app.C", object())
        registry.put("app.A", object())
        registry.put("app.B", object())

        assert list(registry.identifiers()) == ["app.C", "app.A", "app.B"]

    def test_clear(self):
        """Test that clear drops all instances."""
        registry = ObjectRegistry()
        registry.put("app.Service", object())

        registry.clear()

        assert len(registry) == 0
        assert not registry.contains("app.Service")

    def test_none_instance_is_registered(self):
        """Test that None counts as a registered instance."""
        registry = ObjectRegistry()
        registry.put("app.Nothing", None)

        assert registry.contains("app.Nothing")
        assert registry.get("app.Nothing") is None

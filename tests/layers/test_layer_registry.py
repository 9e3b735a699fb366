"""Tests for the shared layer registry."""

import threading
from pathlib import Path

import pytest

from llrt_function.layers import LayerRegistry
from llrt_function.layers import get_default_layer_registry

BINARY = "/cache/llrt/latest/x64/standard/bootstrap"
OTHER_BINARY = "/cache/llrt/latest/arm64/standard/bootstrap"


@pytest.mark.unit
class TestLayerRegistry:
    def test_same_path_returns_same_layer(self, layer_factory) -> None:
        registry = LayerRegistry(layer_factory)
        scope = object()

        first = registry.get_or_create(scope, BINARY)
        second = registry.get_or_create(object(), BINARY)

        assert first is second
        assert len(layer_factory.calls) == 1

    def test_distinct_paths_get_distinct_layers(self, layer_factory) -> None:
        registry = LayerRegistry(layer_factory)

        first = registry.get_or_create(None, BINARY)
        second = registry.get_or_create(None, OTHER_BINARY)

        assert first is not second
        assert len(registry) == 2

    def test_layer_ids_are_sequential(self, layer_factory) -> None:
        registry = LayerRegistry(layer_factory)
        scope = object()

        registry.get_or_create(scope, BINARY)
        registry.get_or_create(scope, OTHER_BINARY)
        registry.get_or_create(scope, BINARY)

        assert [call[1] for call in layer_factory.calls] == ["llrt-layer0", "llrt-layer1"]
        assert layer_factory.calls[0][0] is scope

    def test_content_root_is_binary_directory(self, layer_factory) -> None:
        registry = LayerRegistry(layer_factory)

        registry.get_or_create(None, BINARY)

        assert layer_factory.calls[0][2] == "/cache/llrt/latest/x64/standard"

    def test_path_objects_and_strings_share_a_layer(self, layer_factory) -> None:
        registry = LayerRegistry(layer_factory)

        layer = registry.get_or_create(None, Path(BINARY))

        assert registry.get_or_create(None, BINARY) is layer
        assert BINARY in registry
        assert OTHER_BINARY not in registry

    def test_concurrent_requests_create_one_layer(self, layer_factory) -> None:
        registry = LayerRegistry(layer_factory)
        layers: list[object] = []
        start = threading.Barrier(16)

        def request() -> None:
            start.wait()
            layers.append(registry.get_or_create(None, BINARY))

        threads = [threading.Thread(target=request) for _ in range(16)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(layer_factory.calls) == 1
        assert all(layer is layers[0] for layer in layers)

    def test_registries_are_independent(self, layer_factory) -> None:
        first = LayerRegistry(layer_factory).get_or_create(None, BINARY)
        second = LayerRegistry(layer_factory).get_or_create(None, BINARY)

        assert first is not second


@pytest.mark.unit
def test_default_registry_is_process_wide() -> None:
    assert get_default_layer_registry() is get_default_layer_registry()

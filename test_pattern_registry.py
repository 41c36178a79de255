#!/usr/bin/env python3

"""
Test Module Registry

Checks that every module kind is registered exactly once and that the
registry stays closed to unknown or duplicate kinds.
"""

import pytest

# Import all modules to register them
import tilewall.patterns
from tilewall.patterns import Module, ModuleDefinition, ModuleKind, ModuleRegistry


def test_all_kinds_registered():
    assert ModuleRegistry.kinds() == tuple(ModuleKind)
    assert len(ModuleRegistry.kinds()) == 6


def test_module_names():
    names = [d.name for d in ModuleRegistry.list_modules()]
    assert names == [
        "dot_grid",
        "plus",
        "stripes",
        "checker",
        "solid_block",
        "disc",
    ]


def test_create_returns_requested_kind(constant_noise, palette):
    for kind in ModuleKind:
        instance = ModuleRegistry.create(kind, 42.0, palette, constant_noise)
        assert instance.kind == kind
        assert isinstance(instance, Module)


def test_reregistering_same_class_is_harmless():
    cls = ModuleRegistry.get_module(ModuleKind.DISC)
    assert ModuleRegistry.register(cls) is cls
    assert ModuleRegistry.get_module(ModuleKind.DISC) is cls


def test_duplicate_kind_rejected():
    class AnotherDisc(Module):
        @classmethod
        def definition(cls):
            return ModuleDefinition(kind=ModuleKind.DISC, description="duplicate")

        def render(self, surface, size, t):
            pass

    with pytest.raises(ValueError):
        ModuleRegistry.register(AnotherDisc)
    assert ModuleRegistry.get_module(ModuleKind.DISC) is tilewall.patterns.Disc


def test_unknown_kind_rejected():
    class Rogue(Module):
        @classmethod
        def definition(cls):
            return ModuleDefinition(kind="spiral", description="not a kind")

        def render(self, surface, size, t):
            pass

    with pytest.raises(ValueError):
        ModuleRegistry.register(Rogue)
    assert "spiral" not in [k.value for k in ModuleRegistry.kinds()]


def main():
    """Print the registered modules"""
    definitions = ModuleRegistry.list_modules()
    print(f"Found {len(definitions)} registered modules:")
    for definition in definitions:
        params = ", ".join(p.name for p in definition.parameters) or "static"
        print(f"- {definition.name}: {definition.description} ({params})")


if __name__ == "__main__":
    main()

# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Tests for self and circular dependency detection across modules."""

import pytest

from modjector.container import CycleError, Injector, Module, inject


def node(*dependencies: str) -> type:
    """Build a throwaway class declaring *dependencies*."""

    @inject(*dependencies)
    class Node:
        def __init__(self, *args) -> None:
            self.args = args

    return Node


def declare(name: str, *dependencies: str, strategy: str = "singleton") -> dict:
    return {"name": name, "strategy": strategy, "value": node(*dependencies)}


class TestSingleModuleCycles:
    def test_self_dependency(self):
        main = Module.create_module(
            {
                "name": "MainModule",
                "declarations": [declare("A", "A")],
                "exports": "*",
            }
        )
        with pytest.raises(CycleError, match="MainModule: A -> A"):
            main.injector.resolve("A")

    def test_simple_circular_dependency(self):
        main = Module.create_module(
            {
                "name": "MainModule",
                "declarations": [declare("A", "B"), declare("B", "A")],
                "exports": "*",
            }
        )
        with pytest.raises(CycleError, match="MainModule: A -> B -> A"):
            main.injector.resolve("A")

    def test_complex_circular_dependency(self):
        main = Module.create_module(
            {
                "name": "MainModule",
                "declarations": [declare("A", "B"), declare("B", "C"), declare("C", "A")],
                "exports": "*",
            }
        )
        with pytest.raises(CycleError) as exc_info:
            main.injector.resolve("A")
        assert str(exc_info.value) == "MainModule: A -> B -> C -> A"
        assert exc_info.value.module == "MainModule"
        assert exc_info.value.path == ["A", "B", "C", "A"]

    def test_resolved_siblings_do_not_appear_in_path(self):
        main = Module.create_module(
            {
                "name": "MainModule",
                "declarations": [
                    declare("A", "B"),
                    declare("B", "D", "C"),
                    declare("C", "A"),
                    declare("D"),
                ],
                "exports": "*",
            }
        )
        with pytest.raises(CycleError) as exc_info:
            main.injector.resolve("A")
        assert str(exc_info.value) == "MainModule: A -> B -> C -> A"

    def test_cycle_segment_excludes_entry_prefix(self):
        injector = Injector("M")
        injector.register(declare("A", "B"), declare("B", "C"), declare("C", "B"))
        with pytest.raises(CycleError) as exc_info:
            injector.resolve("A")
        assert str(exc_info.value) == "M: B -> C -> B"

    def test_cycle_through_factories(self):
        injector = Injector("M")
        injector.register(declare("A", "B", strategy="factory"), declare("B", "A", strategy="factory"))
        with pytest.raises(CycleError, match="M: A -> B -> A"):
            injector.resolve("A")

    def test_registration_of_cycle_is_lazy(self):
        injector = Injector("M")
        injector.register(declare("A", "B"), declare("B", "A"))
        assert injector.contains("A")
        assert injector.contains("B")

    def test_diamond_is_not_a_cycle(self):
        injector = Injector("M")
        injector.register(
            declare("Top", "Left", "Right"),
            declare("Left", "Bottom"),
            declare("Right", "Bottom"),
            declare("Bottom"),
        )
        top = injector.resolve("Top")
        left, right = top.args
        assert left.args[0] is right.args[0]


class TestAliasCycles:
    def test_alias_is_a_pass_through_in_cycle_path(self):
        injector = Injector("M")
        injector.register(
            declare("A", "Shortcut"),
            {"name": "Shortcut", "strategy": "alias", "value": "A"},
        )
        with pytest.raises(CycleError) as exc_info:
            injector.resolve("A")
        assert str(exc_info.value) == "M: A -> A"

    def test_alias_loop(self):
        injector = Injector("M")
        injector.register(
            {"name": "First", "strategy": "alias", "value": "Second"},
            {"name": "Second", "strategy": "alias", "value": "First"},
        )
        with pytest.raises(CycleError) as exc_info:
            injector.resolve("First")
        assert str(exc_info.value) == "M: First -> Second -> First"

    def test_self_alias(self):
        injector = Injector("M")
        injector.register({"name": "Me", "strategy": "alias", "value": "Me"})
        with pytest.raises(CycleError, match="M: Me -> Me"):
            injector.resolve("Me")


class TestCrossModuleCycles:
    def test_cycle_reported_against_declaring_module(self):
        to_be_imported = Module.create_module(
            {
                "name": "XModule",
                "declarations": [
                    declare("C", "D", strategy="factory"),
                    declare("D", "E", strategy="factory"),
                    declare("E", "F", strategy="factory"),
                    declare("F", "C", strategy="factory"),
                ],
                "exports": ["C", "D"],
            }
        )
        main = Module.create_module(
            {
                "name": "YModule",
                "declarations": [
                    declare("A", "B", strategy="factory"),
                    declare("B", "C", "D", strategy="factory"),
                ],
                "imports": [to_be_imported],
                "exports": "*",
            }
        )
        with pytest.raises(CycleError) as exc_info:
            main.injector.resolve("A")
        assert str(exc_info.value) == "XModule: C -> D -> E -> F -> C"

    def test_cycle_through_several_modules(self):
        x = Module.create_module(
            {
                "name": "Module X",
                "declarations": [
                    declare("G", "OK", "Good", "H", strategy="factory"),
                    declare("H", "I", strategy="factory"),
                    declare("I", "J", strategy="factory"),
                    declare("J", "G", strategy="factory"),
                    {"name": "OK", "strategy": "constant", "value": 123},
                    declare("Good"),
                ],
                "exports": ["G"],
            }
        )
        y = Module.create_module(
            {
                "name": "Module Y",
                "declarations": [
                    declare("C", "D", strategy="factory"),
                    declare("D", "E", strategy="factory"),
                    declare("E", "F", strategy="factory"),
                    declare("F", "G", strategy="factory"),
                ],
                "imports": [x],
                "exports": ["C", "D"],
            }
        )
        z = Module.create_module(
            {
                "name": "Module Z",
                "declarations": [
                    declare("A", "B", strategy="factory"),
                    declare("B", "C", "D", strategy="factory"),
                ],
                "imports": [y],
                "exports": "*",
            }
        )
        with pytest.raises(CycleError) as exc_info:
            z.injector.resolve("A")
        assert str(exc_info.value) == "Module X: G -> H -> I -> J -> G"
        assert exc_info.value.module == "Module X"

        with pytest.raises(CycleError, match="Module X: G -> H -> I -> J -> G"):
            y.injector.resolve("C")

    def test_cycle_spanning_two_modules_uses_entry_module(self):
        inner = Injector("Inner")
        outer = Injector("Outer")
        outer.register(declare("A", "B"))
        inner.register(declare("B", "A"))
        # Each injector sees the other's declaration.
        inner.add_imports({"A": outer.get_config_of("A")})
        outer.add_imports({"B": inner.get_config_of("B")})

        with pytest.raises(CycleError) as exc_info:
            outer.resolve("A")
        assert str(exc_info.value) == "Outer: A -> B -> A"

        with pytest.raises(CycleError) as exc_info:
            inner.resolve("B")
        assert str(exc_info.value) == "Inner: B -> A -> B"


class TestAtomicResolution:
    def test_no_singleton_cached_when_cycle_aborts(self):
        created = []

        class Healthy:
            def __init__(self) -> None:
                created.append(self)

        injector = Injector("M")
        injector.register(
            declare("Root", "Healthy", "Broken"),
            {"name": "Healthy", "strategy": "singleton", "value": Healthy},
            declare("Broken", "Broken"),
        )
        with pytest.raises(CycleError, match="M: Broken -> Broken"):
            injector.resolve("Root")
        assert len(created) == 1

        healthy = injector.resolve("Healthy")
        assert len(created) == 2
        assert healthy is created[1]

        injector.register(declare("Broken"))
        root = injector.resolve("Root")
        assert root.args[0] is healthy
        assert len(created) == 2

    def test_constructor_failure_discards_staged_singletons(self):
        class Exploding:
            def __init__(self, healthy) -> None:
                raise RuntimeError("boom")

        injector = Injector("M")
        injector.register(
            declare("Healthy"),
            {"name": "Exploding", "strategy": "singleton", "value": Exploding, "dependencies": ["Healthy"]},
        )
        with pytest.raises(RuntimeError, match="boom"):
            injector.resolve("Exploding")

        first = injector.resolve("Healthy")
        assert injector.resolve("Healthy") is first

    def test_failed_resolve_leaves_path_clean(self):
        injector = Injector("M")
        injector.register(declare("A", "B"), declare("B", "A"), declare("Solo"))
        with pytest.raises(CycleError):
            injector.resolve("A")
        assert injector.resolve("Solo") is injector.resolve("Solo")

    def test_deep_chain_recursion_error_leaves_injector_usable(self):
        depth = 5000
        injector = Injector("M")
        injector.register(
            *(declare(f"N{i}", f"N{i + 1}") for i in range(depth - 1)),
            declare(f"N{depth - 1}"),
            declare("Solo"),
        )
        with pytest.raises(RecursionError):
            injector.resolve("N0")

        solo = injector.resolve("Solo")
        assert injector.resolve("Solo") is solo

        tail = injector.resolve(f"N{depth - 3}")
        assert tail.args[0].args[0] is injector.resolve(f"N{depth - 1}")

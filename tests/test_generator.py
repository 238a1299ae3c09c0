"""Tests for composite generators."""

from unittest.mock import MagicMock

import pytest

from codegen_toolbox.core.exceptions import TransformationError
from codegen_toolbox.generator import Generator
from codegen_toolbox.output.routing import MemoryRouter
from codegen_toolbox.template import Template


class EntityTemplate(Template):
    """Template emitting one class per entity name."""

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self.entity: str | None = None

    def validate(self) -> None:
        if not self.entity:
            self.error("entity is required")
        elif not self.entity[0].isupper():
            self.warning("entity '{0}' should be capitalized", self.entity)

    def transform_text(self) -> str:
        return f"class {self.entity}:\n    pass\n"


class EntityGenerator(Generator):
    """Generator rendering one file per entity into a configurable directory."""

    def __init__(self, entities: list[str], router: MemoryRouter) -> None:
        super().__init__(name="entities")
        self.entities = entities
        self.template = self.add_template(EntityTemplate(router=router), configure=self._route)

    def _route(self, template: Template) -> None:
        template.output.directory = "models"

    def validate(self) -> None:
        if not self.entities:
            self.error("at least one entity is required")

    def run_core(self) -> None:
        for entity in self.entities:
            self.template.entity = entity
            self.render_template(self.template, f"{entity.lower()}.py")


class TestGeneratorRun:
    """Tests for Generator.run()."""

    def test_renders_each_template_output(self, memory_router: MemoryRouter) -> None:
        """Each entity is rendered to its own routed file."""
        generator = EntityGenerator(["User", "Order"], memory_router)

        diagnostics = generator.run()

        assert not diagnostics
        assert memory_router.outputs == {
            "models/user.py": "class User:\n    pass\n",
            "models/order.py": "class Order:\n    pass\n",
        }

    def test_validation_error_skips_run_core(self, memory_router: MemoryRouter) -> None:
        """Validation errors stop run_core before anything is rendered."""
        generator = EntityGenerator([], memory_router)

        diagnostics = generator.run()

        assert [d.message for d in diagnostics.errors] == ["at least one entity is required"]
        assert diagnostics.errors[0].source == "entities"
        assert memory_router.calls == []

    def test_merges_template_diagnostics(self, memory_router: MemoryRouter) -> None:
        """Template warnings are collected, tagged with the template name."""
        generator = EntityGenerator(["user"], memory_router)

        diagnostics = generator.run()

        assert len(diagnostics.warnings) == 1
        assert diagnostics.warnings[0].message == "entity 'user' should be capitalized"
        assert diagnostics.warnings[0].source == "EntityTemplate"

    def test_user_handler_overrides_generator_routing(self, memory_router: MemoryRouter) -> None:
        """Handlers added by users run after the generator's own."""
        generator = EntityGenerator(["User"], memory_router)
        generator.template.add_rendering_handler(
            lambda t: setattr(t.output, "directory", "custom")
        )

        generator.run()

        assert list(memory_router.outputs) == ["custom/user.py"]

    def test_disabled_template_is_skipped(self, memory_router: MemoryRouter) -> None:
        """Disabled templates contribute neither output nor diagnostics."""
        generator = EntityGenerator(["User"], memory_router)
        generator.template.enabled = False

        diagnostics = generator.run()

        assert memory_router.outputs == {}
        assert not diagnostics

    def test_transformation_error_recorded(self) -> None:
        """TransformationError from run_core becomes a tagged error diagnostic."""
        def run_core(generator: Generator) -> None:
            raise TransformationError("schema file is empty")

        diagnostics = Generator(run_core=run_core, name="schema").run()

        assert [str(d) for d in diagnostics] == ["schema: error: schema file is empty"]

    def test_defect_propagates(self) -> None:
        """Other exceptions from run_core propagate."""
        def run_core(generator: Generator) -> None:
            raise RuntimeError("bug")

        with pytest.raises(RuntimeError, match="bug"):
            Generator(run_core=run_core).run()

    def test_rerun_clears_diagnostics(self, memory_router: MemoryRouter) -> None:
        """Diagnostics from a previous run are cleared."""
        generator = EntityGenerator([], memory_router)
        generator.run()

        generator.entities = ["User"]
        assert not generator.run()

    def test_injected_validate(self) -> None:
        """Injected validate hook runs and can block run_core."""
        run_core = MagicMock()
        generator = Generator(run_core=run_core, validate=lambda g: g.error("bad {0}", "input"))

        diagnostics = generator.run()

        run_core.assert_not_called()
        assert diagnostics.errors[0].message == "bad input"

    def test_missing_run_core_is_a_defect(self) -> None:
        """Generator without run_core raises NotImplementedError."""
        with pytest.raises(NotImplementedError):
            Generator().run()


class TestRenderTemplate:
    """Tests for Generator.render_template()."""

    def test_if_not_exists(self, memory_router: MemoryRouter) -> None:
        """if_not_exists only writes on the first render."""
        generator = Generator(name="g")
        template = generator.add_template(Template(emit=lambda t: "x", router=memory_router))

        generator.render_template(template, "a.txt", if_not_exists=True)
        generator.render_template(template, "a.txt", if_not_exists=True)

        assert [c.wrote for c in memory_router.calls] == [True, False]

    def test_if_not_exists_requires_path(self) -> None:
        """if_not_exists without a path raises ValueError."""
        generator = Generator()
        with pytest.raises(ValueError):
            generator.render_template(Template(emit=lambda t: "x"), if_not_exists=True)

    def test_uses_template_output_without_path(self, memory_router: MemoryRouter) -> None:
        """Without a path the template's own output settings are used."""
        generator = Generator()
        template = Template(emit=lambda t: "x", router=memory_router)
        template.output.file = "preset.txt"

        generator.render_template(template)

        assert memory_router.outputs == {"preset.txt": "x"}

    def test_add_template_records_order(self) -> None:
        """add_template keeps registration order."""
        generator = Generator()
        first = generator.add_template(Template(name="a"))
        second = generator.add_template(Template(name="b"))
        assert generator.templates == [first, second]

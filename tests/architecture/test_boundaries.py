import pytest
from pytest_archon import archrule


def test_core_independence() -> None:
    """
    Core must not import from the encoding package.
    It is the foundation and must remain independent.
    """
    (
        archrule("core_is_independent")
        .match("url_params_core*")
        .should_not_import("url_params_encoding*")
        .check("url_params_core")
    )


def test_primitives_isolation() -> None:
    """
    Primitives (exceptions) sit at the bottom of the core package.
    They must not import domain or ports.
    """
    (
        archrule("primitives_isolation")
        .match("url_params_core.primitives*")
        .should_not_import("url_params_core.domain*")
        .should_not_import("url_params_core.ports*")
        .check("url_params_core")
    )


@pytest.mark.parametrize(
    "module",
    [
        "url_params_encoding.shapes",
        "url_params_encoding.classifier",
        "url_params_encoding.encoders",
        "url_params_encoding.assembler",
    ],
)
def test_engine_does_not_depend_on_surfaces(module: str) -> None:
    """
    The classifier, encoders and assembler form the engine.
    They must not reach up into the registration surfaces.
    """
    (
        archrule(f"engine_layering:{module}")
        .match(module)
        .should_not_import("url_params_encoding.registry")
        .should_not_import("url_params_encoding.decorators")
        .should_not_import("url_params_encoding.model")
        .check("url_params_encoding", only_direct_imports=True)
    )

"""COI pattern pipeline engine."""

from coimap.engine.registry import stage, Step, get_registry
from coimap.engine.context import COIContext, COILayer
from coimap.engine.pipeline import COIPipeline, add_cois, compile_cois

__all__ = [
    "stage",
    "Step",
    "get_registry",
    "COIContext",
    "COILayer",
    "COIPipeline",
    "add_cois",
    "compile_cois",
]

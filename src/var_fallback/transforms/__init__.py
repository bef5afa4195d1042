from var_fallback.model.diagnostic import DiagnosticSink
from var_fallback.model.stylesheet import Stylesheet
from var_fallback.transforms.base import Transform
from var_fallback.transforms.fallback import VarFallbackTransform

__all__ = ["Transform", "VarFallbackTransform", "apply_transforms"]


def apply_transforms(
    stylesheet: Stylesheet, transforms: list[Transform], diagnostics: DiagnosticSink
) -> Stylesheet:
    """Apply *transforms* to *stylesheet* in order."""
    for t in transforms:
        stylesheet = t.apply(stylesheet, diagnostics)
    return stylesheet

"""Pipeline global variable libraries (`vars/`) rewritten as compilable Groovy classes."""

from .naming import (
    GLOBALVARS_PACKAGE,
    REGISTRY_CLASS,
    REGISTRY_FILE_STEM,
    render_registry,
    render_wrapper,
    transform_line,
    variable_name,
    wrapper_class_name,
)
from .transformer import GlobalVarsResult, RegistryModule, WrapperModule, transform_global_vars

__all__ = [
    "GLOBALVARS_PACKAGE",
    "REGISTRY_CLASS",
    "REGISTRY_FILE_STEM",
    "GlobalVarsResult",
    "RegistryModule",
    "WrapperModule",
    "render_registry",
    "render_wrapper",
    "transform_global_vars",
    "transform_line",
    "variable_name",
    "wrapper_class_name",
]
